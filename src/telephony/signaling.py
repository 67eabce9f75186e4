"""Contracts between a participant, its routing backend and its observer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol

from telephony.states import BUSY_STATES, CallResponse, CallState


@dataclass(frozen=True, slots=True)
class ParticipantSnapshot:
    address: str
    state: CallState
    counterpart: str

    @property
    def busy(self) -> bool:
        return self.state in BUSY_STATES


class StateObserver(Protocol):
    """Receives a snapshot after every committed transition of one participant."""

    def on_state_changed(self, snapshot: ParticipantSnapshot) -> None:  # pragma: no cover - protocol stub
        ...


class SignalingBackend(ABC):
    """Routing capability a participant is built with.

    `caller` is always the line that dialled and `callee` the line that was
    dialled, regardless of which side issues the request.
    """

    @abstractmethod
    async def place_call(self, caller: str, callee: str) -> CallResponse:
        """Offer a call to `callee` and report whether it rings."""

    @abstractmethod
    async def answer(self, caller: str, callee: str) -> bool:
        """Tell the waiting `caller` that `callee` picked up."""

    @abstractmethod
    async def reject(self, caller: str, callee: str) -> bool:
        """Tell the waiting `caller` that `callee` declined."""

    @abstractmethod
    async def hangup(self, requester: str, counterpart: str) -> bool:
        """Tell `counterpart` that `requester` ended the call."""

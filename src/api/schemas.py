"""API-facing Pydantic models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from telephony.events import StateChangeEvent
from telephony.signaling import ParticipantSnapshot
from telephony.states import CallState


class ParticipantResponse(BaseModel):
    address: str
    state: CallState
    counterpart: str = Field(description="Address of the other line, empty while idle.")
    busy: bool

    @classmethod
    def from_snapshot(cls, snapshot: ParticipantSnapshot) -> ParticipantResponse:
        return cls(
            address=snapshot.address,
            state=snapshot.state,
            counterpart=snapshot.counterpart,
            busy=snapshot.busy,
        )


class CallRequest(BaseModel):
    callee: str = Field(min_length=1, max_length=16, description="Number to dial.")


class StateChangeResponse(BaseModel):
    sequence: int
    occurred_at: datetime
    participant: ParticipantResponse

    @classmethod
    def from_event(cls, event: StateChangeEvent) -> StateChangeResponse:
        return cls(
            sequence=event.sequence,
            occurred_at=event.occurred_at,
            participant=ParticipantResponse.from_snapshot(event.snapshot),
        )

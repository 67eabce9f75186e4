"""Participant registry and signaling router."""

from __future__ import annotations

import asyncio
import logging
import random
import re
from collections.abc import Iterator, Sequence
from typing import Final

from telephony.errors import (
    AddressSpaceExhaustedError,
    InvalidAddressError,
    InvalidParticipantCountError,
    UnknownParticipantError,
)
from telephony.participant import Participant
from telephony.signaling import SignalingBackend
from telephony.states import CallResponse

LOGGER = logging.getLogger(__name__)

ADDRESS_PATTERN: Final = re.compile(r"[0-9]{3}")
LOWEST_ADDRESS: Final[int] = 100
HIGHEST_ADDRESS: Final[int] = 999
ADDRESS_SPACE: Final[int] = HIGHEST_ADDRESS - LOWEST_ADDRESS + 1


def generate_addresses(count: int, rng: random.Random | None = None) -> list[str]:
    """Draw `count` distinct addresses, resampling on collision.

    Raises:
        InvalidParticipantCountError: if `count` is below one.
        AddressSpaceExhaustedError: if `count` exceeds the 900 available numbers.
    """

    if count < 1:
        raise InvalidParticipantCountError(f"Participant count must be at least 1, got {count}.")
    if count > ADDRESS_SPACE:
        raise AddressSpaceExhaustedError(f"Only {ADDRESS_SPACE} addresses exist, {count} requested.")

    rng = rng or random.Random()
    taken: set[str] = set()
    addresses: list[str] = []
    for _ in range(count):
        address = str(rng.randint(LOWEST_ADDRESS, HIGHEST_ADDRESS))
        while address in taken:
            address = str(rng.randint(LOWEST_ADDRESS, HIGHEST_ADDRESS))
        taken.add(address)
        addresses.append(address)
    return addresses


def validate_addresses(addresses: Sequence[str]) -> list[str]:
    if not addresses:
        raise InvalidParticipantCountError("At least one address is required.")
    for address in addresses:
        if not ADDRESS_PATTERN.fullmatch(address):
            raise InvalidAddressError(f"Address {address!r} is not a 3-digit number.")
    if len(set(addresses)) != len(addresses):
        raise InvalidAddressError("Addresses must be pairwise distinct.")
    return list(addresses)


class Network(SignalingBackend):
    """Directory of participants that routes signaling between pairs of lines.

    The network holds no call state of its own: every routing operation is a
    lookup followed by a call into the guarded handler of the participant that
    has to react. A lookup miss is the only failure it introduces.
    """

    def __init__(
        self,
        participant_count: int,
        *,
        addresses: Sequence[str] | None = None,
        rng: random.Random | None = None,
        signaling_delay: float = 0.0,
    ) -> None:
        if addresses is None:
            numbers = generate_addresses(participant_count, rng)
        else:
            numbers = validate_addresses(addresses)
            if len(numbers) != participant_count:
                raise InvalidParticipantCountError(
                    f"Got {len(numbers)} addresses for {participant_count} participants."
                )

        self._signaling_delay = signaling_delay
        self._registry: dict[str, Participant] = {number: Participant(number, self) for number in numbers}
        LOGGER.info("Network created with %d participants: %s", len(self._registry), ", ".join(numbers))

    @classmethod
    def from_addresses(cls, addresses: Sequence[str], **kwargs) -> Network:
        return cls(len(addresses), addresses=addresses, **kwargs)

    @property
    def addresses(self) -> list[str]:
        return list(self._registry)

    @property
    def participants(self) -> list[Participant]:
        return list(self._registry.values())

    def __len__(self) -> int:
        return len(self._registry)

    def __contains__(self, address: object) -> bool:
        return address in self._registry

    def __iter__(self) -> Iterator[Participant]:
        return iter(self._registry.values())

    def get(self, address: str) -> Participant | None:
        return self._registry.get(address)

    def require(self, address: str) -> Participant:
        participant = self._registry.get(address)
        if participant is None:
            raise UnknownParticipantError(f"No participant with address {address!r}.")
        return participant

    async def _hop(self) -> None:
        # Every routing step is a suspension point, like a real network round trip.
        await asyncio.sleep(self._signaling_delay)

    async def place_call(self, caller: str, callee: str) -> CallResponse:
        await self._hop()
        target = self._registry.get(callee)
        if target is None:
            LOGGER.debug("Call %s -> %s: unknown number", caller, callee)
            return CallResponse.UNKNOWN_NUMBER

        if await target.on_call_receive(caller):
            return CallResponse.RINGING
        LOGGER.debug("Call %s -> %s: callee busy", caller, callee)
        return CallResponse.BUSY

    call = place_call

    async def answer(self, caller: str, callee: str) -> bool:
        await self._hop()
        waiting = self._registry.get(caller)
        if waiting is None:
            return False
        return await waiting.on_callee_answer(callee)

    async def reject(self, caller: str, callee: str) -> bool:
        await self._hop()
        waiting = self._registry.get(caller)
        if waiting is None:
            return False
        return await waiting.on_callee_reject(callee)

    async def hangup(self, requester: str, counterpart: str) -> bool:
        await self._hop()
        other = self._registry.get(counterpart)
        if other is None:
            return False
        return await other.on_callee_hangup(requester)

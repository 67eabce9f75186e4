"""Call states and call-placement responses shared by participants and the network."""

from __future__ import annotations

from enum import Enum
from typing import Final


class CallState(str, Enum):
    IDLE = "idle"
    # Incoming call waiting for a local decision.
    RINGING = "ringing"
    # Outgoing request sent, network has not resolved it yet.
    CALLING = "calling"
    CALLEE_IS_RINGING = "callee_is_ringing"
    NUMBER_UNKNOWN = "number_unknown"
    CALLEE_IS_BUSY = "callee_is_busy"
    TALKING = "talking"


class CallResponse(str, Enum):
    RINGING = "ringing"
    BUSY = "busy"
    UNKNOWN_NUMBER = "unknown_number"


BUSY_STATES: Final[frozenset[CallState]] = frozenset(
    {
        CallState.RINGING,
        CallState.CALLEE_IS_RINGING,
        CallState.TALKING,
        CallState.CALLING,
    }
)

"""Domain-specific exceptions for the telephony network.

Call outcomes (busy, unknown number, stale signaling) are never raised; they are
returned as `CallResponse` values or booleans. These exceptions only cover
construction mistakes and misuse of the control surface.
"""

from __future__ import annotations


class TelephonyError(Exception):
    status_code: int = 500
    default_detail: str = "Telephony error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.default_detail)
        self.detail = detail or self.default_detail


class InvalidParticipantCountError(TelephonyError):
    status_code = 422
    default_detail = "Participant count must be a positive integer."


class AddressSpaceExhaustedError(TelephonyError):
    status_code = 422
    default_detail = "Not enough 3-digit addresses for the requested participant count."


class InvalidAddressError(TelephonyError):
    status_code = 422
    default_detail = "Addresses must be unique 3-digit numbers."


class UnknownParticipantError(TelephonyError):
    status_code = 404
    default_detail = "No participant with this address."


class InvalidStateError(TelephonyError):
    status_code = 409
    default_detail = "State and counterpart are inconsistent."


class ObserverAlreadyAttachedError(TelephonyError):
    status_code = 409
    default_detail = "Participant already has a state observer."


class ActionNotAvailableError(TelephonyError):
    status_code = 409
    default_detail = "Action not available in the current call state."

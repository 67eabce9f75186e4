"""Per-line call-signaling state machine."""

from __future__ import annotations

import logging

from telephony.errors import InvalidStateError, ObserverAlreadyAttachedError
from telephony.signaling import ParticipantSnapshot, SignalingBackend, StateObserver
from telephony.states import BUSY_STATES, CallResponse, CallState

LOGGER = logging.getLogger(__name__)


class Participant:
    """One telephone line.

    The participant owns its state and counterpart. Everything else (the
    network, other participants, the control surface) reaches them only
    through the methods below.

    Signaling is asynchronous: between sending a request to the backend and
    getting the answer, any other task may run and change this line (for
    example a forced reset). Handlers that resume such a request therefore
    re-check the expected predecessor state and counterpart and refuse to
    mutate when they no longer match.
    """

    def __init__(self, address: str, backend: SignalingBackend) -> None:
        self._address = address
        self._backend = backend
        self._state = CallState.IDLE
        self._counterpart = ""
        self._observer: StateObserver | None = None

    @property
    def address(self) -> str:
        return self._address

    @property
    def state(self) -> CallState:
        return self._state

    @property
    def counterpart(self) -> str:
        return self._counterpart

    def __repr__(self) -> str:
        return f"Participant(address={self._address!r}, state={self._state.value!r}, counterpart={self._counterpart!r})"

    def snapshot(self) -> ParticipantSnapshot:
        return ParticipantSnapshot(address=self._address, state=self._state, counterpart=self._counterpart)

    def is_busy(self) -> bool:
        return self._state in BUSY_STATES

    # Observer slot ---------------------------------------------------------

    def attach_observer(self, observer: StateObserver) -> None:
        if self._observer is observer:
            return
        if self._observer is not None:
            raise ObserverAlreadyAttachedError(f"Participant {self._address} already has a state observer.")
        self._observer = observer

    def detach_observer(self) -> None:
        self._observer = None

    def force_state(self, state: CallState, counterpart: str = "") -> None:
        """Commit an arbitrary state, bypassing the transition guards.

        Meant for operators and tests that need to put a line into a given
        situation (e.g. an external reset while a response is in flight).

        Raises:
            InvalidStateError: if `counterpart` is empty for a non-idle state
                or set for the idle state.
        """

        if state is CallState.IDLE and counterpart:
            raise InvalidStateError("An idle line cannot have a counterpart.")
        if state is not CallState.IDLE and not counterpart:
            raise InvalidStateError(f"State {state.value} requires a counterpart.")
        self._commit(state, counterpart)

    def _commit(self, state: CallState, counterpart: str) -> None:
        previous = self._state
        self._state = state
        self._counterpart = "" if state is CallState.IDLE else counterpart
        LOGGER.debug(
            "Line %s: %s -> %s (counterpart=%r)", self._address, previous.value, state.value, self._counterpart
        )
        self._notify()

    def _notify(self) -> None:
        if self._observer is None:
            return
        try:
            self._observer.on_state_changed(self.snapshot())
        except Exception:
            LOGGER.exception("State observer failed for line %s", self._address)

    def _expects(self, state: CallState, counterpart: str) -> bool:
        if self._state is state and self._counterpart == counterpart:
            return True
        LOGGER.debug(
            "Line %s: ignoring stale signaling from %s (expected %s, is %s/%r)",
            self._address,
            counterpart,
            state.value,
            self._state.value,
            self._counterpart,
        )
        return False

    # Incoming signaling ----------------------------------------------------

    async def on_call_receive(self, caller: str) -> bool:
        if self.is_busy():
            return False
        self._commit(CallState.RINGING, caller)
        return True

    async def on_callee_answer(self, callee: str) -> bool:
        if not self._expects(CallState.CALLEE_IS_RINGING, callee):
            return False
        self._commit(CallState.TALKING, callee)
        return True

    async def on_callee_reject(self, callee: str) -> bool:
        if not self._expects(CallState.CALLEE_IS_RINGING, callee):
            return False
        self._commit(CallState.CALLEE_IS_BUSY, callee)
        return True

    async def on_callee_busy(self, callee: str) -> bool:
        if not self._expects(CallState.CALLING, callee):
            return False
        self._commit(CallState.CALLEE_IS_BUSY, callee)
        return True

    async def on_unknown_number_called(self, callee: str) -> bool:
        if not self._expects(CallState.CALLING, callee):
            return False
        self._commit(CallState.NUMBER_UNKNOWN, callee)
        return True

    async def on_callee_ringing(self, callee: str) -> bool:
        if not self._expects(CallState.CALLING, callee):
            return False
        self._commit(CallState.CALLEE_IS_RINGING, callee)
        return True

    async def on_callee_hangup(self, counterpart: str) -> bool:
        if not self._expects(CallState.TALKING, counterpart):
            return False
        self._commit(CallState.IDLE, "")
        return True

    # Local actions ---------------------------------------------------------

    async def make_a_call(self, callee: str) -> None:
        """Dial `callee`.

        Silently ignored for an empty number, the own number, or while busy.
        The line switches to `calling` before the first suspension so a second
        dial on the same line cannot slip in while the first is being routed.
        """

        if not callee or callee == self._address or self.is_busy():
            LOGGER.debug("Line %s: dial to %r ignored in state %s", self._address, callee, self._state.value)
            return

        self._commit(CallState.CALLING, callee)

        response = await self._backend.place_call(self._address, callee)
        if response is CallResponse.BUSY:
            await self.on_callee_busy(callee)
        elif response is CallResponse.UNKNOWN_NUMBER:
            await self.on_unknown_number_called(callee)
        else:
            await self.on_callee_ringing(callee)

    async def answer_current_call(self) -> None:
        if self._state is not CallState.RINGING:
            LOGGER.debug("Line %s: nothing to answer in state %s", self._address, self._state.value)
            return

        caller = self._counterpart
        answered = await self._backend.answer(caller, self._address)
        if answered:
            self._commit(CallState.TALKING, caller)
        else:
            # The caller gave up or moved on while we were ringing.
            LOGGER.info("Line %s: caller %s no longer waiting", self._address, caller)
            self._commit(CallState.IDLE, "")

    async def reject_current_call(self) -> None:
        await self._backend.reject(self._counterpart, self._address)
        self._commit(CallState.IDLE, "")

    async def hangup_current_call(self) -> None:
        await self._backend.hangup(self._address, self._counterpart)
        self._commit(CallState.IDLE, "")

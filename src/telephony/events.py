"""In-memory record of participant state changes."""

from __future__ import annotations

import itertools
import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from telephony.participant import Participant
from telephony.signaling import ParticipantSnapshot

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StateChangeEvent:
    sequence: int
    snapshot: ParticipantSnapshot
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class StateChangeLog:
    """Bounded, in-memory record of committed transitions.

    Acts as the single state observer of every participant it watches.
    """

    def __init__(self, maxlen: int = 200) -> None:
        self._events: deque[StateChangeEvent] = deque(maxlen=maxlen)
        self._sequence = itertools.count(1)

    def watch(self, participants: Iterable[Participant]) -> None:
        for participant in participants:
            participant.attach_observer(self)

    def on_state_changed(self, snapshot: ParticipantSnapshot) -> None:
        event = StateChangeEvent(sequence=next(self._sequence), snapshot=snapshot)
        self._events.append(event)
        LOGGER.info(
            "#%d line %s is %s (counterpart=%r)",
            event.sequence,
            snapshot.address,
            snapshot.state.value,
            snapshot.counterpart,
        )

    def recent(self, limit: int | None = None) -> list[StateChangeEvent]:
        events = list(self._events)
        if limit is None:
            return events
        return events[-limit:] if limit > 0 else []

    def __len__(self) -> int:
        return len(self._events)

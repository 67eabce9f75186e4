"""Shared FastAPI dependencies.

Separated to avoid circular imports between route modules.
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import lru_cache

from config.settings import get_settings
from telephony.errors import ActionNotAvailableError
from telephony.events import StateChangeLog
from telephony.network import Network
from telephony.participant import Participant


@dataclass(slots=True)
class Exchange:
    """A network together with the log observing its participants."""

    network: Network
    events: StateChangeLog
    pending_lines: set[str] = field(default_factory=set)

    @contextmanager
    def line_action(self, address: str) -> Iterator[Participant]:
        """Hold `address` for one handset action at a time.

        A second request for the same line (answer and reject racing, say) is
        refused until the first one has been routed.
        """

        participant = self.network.require(address)
        if address in self.pending_lines:
            raise ActionNotAvailableError(f"Line {address} is already handling a request.")
        self.pending_lines.add(address)
        try:
            yield participant
        finally:
            self.pending_lines.discard(address)


def build_exchange(network: Network, *, history_size: int = 200) -> Exchange:
    events = StateChangeLog(maxlen=history_size)
    events.watch(network)
    return Exchange(network=network, events=events)


@lru_cache(maxsize=1)
def _exchange_factory() -> Exchange:
    settings = get_settings()
    rng = random.Random(settings.address_seed) if settings.address_seed is not None else None
    network = Network(
        settings.participant_count,
        rng=rng,
        signaling_delay=settings.signaling_delay_seconds,
    )
    return build_exchange(network, history_size=settings.event_history_size)


def get_exchange() -> Exchange:
    return _exchange_factory()

from __future__ import annotations

import asyncio

import pytest

from api.dependencies import build_exchange
from api.routes import answer_call, reject_call
from telephony.errors import ActionNotAvailableError
from telephony.network import Network
from telephony.states import CallState


@pytest.fixture()
def exchange():
    return build_exchange(Network.from_addresses(["111", "222"]))


def test_answer_and_reject_racing_on_one_line_only_one_goes_through(exchange) -> None:
    a, b = exchange.network.require("111"), exchange.network.require("222")

    async def scenario():
        await a.make_a_call("222")
        return await asyncio.gather(
            answer_call("222", exchange),
            reject_call("222", exchange),
            return_exceptions=True,
        )

    answered, rejected = asyncio.run(scenario())

    assert answered.state is CallState.TALKING
    assert isinstance(rejected, ActionNotAvailableError)
    assert (a.state, a.counterpart) == (CallState.TALKING, "222")
    assert (b.state, b.counterpart) == (CallState.TALKING, "111")
    assert exchange.pending_lines == set()


def test_line_is_released_after_refused_action(exchange) -> None:
    with pytest.raises(ActionNotAvailableError):
        asyncio.run(answer_call("222", exchange))
    assert exchange.pending_lines == set()

    with exchange.line_action("222") as participant:
        assert participant.address == "222"
        with pytest.raises(ActionNotAvailableError):
            with exchange.line_action("222"):
                pass
    assert exchange.pending_lines == set()

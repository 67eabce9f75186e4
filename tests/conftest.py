from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from telephony.signaling import SignalingBackend  # noqa: E402
from telephony.states import CallResponse  # noqa: E402


class FakeBackend(SignalingBackend):
    """Records requests and answers with canned results."""

    def __init__(
        self,
        *,
        call_response: CallResponse = CallResponse.RINGING,
        answer_result: bool = True,
        reject_result: bool = True,
        hangup_result: bool = True,
    ) -> None:
        self.call_response = call_response
        self.answer_result = answer_result
        self.reject_result = reject_result
        self.hangup_result = hangup_result
        self.requests: list[tuple[str, str, str]] = []

    async def place_call(self, caller: str, callee: str) -> CallResponse:
        self.requests.append(("place_call", caller, callee))
        return self.call_response

    async def answer(self, caller: str, callee: str) -> bool:
        self.requests.append(("answer", caller, callee))
        return self.answer_result

    async def reject(self, caller: str, callee: str) -> bool:
        self.requests.append(("reject", caller, callee))
        return self.reject_result

    async def hangup(self, requester: str, counterpart: str) -> bool:
        self.requests.append(("hangup", requester, counterpart))
        return self.hangup_result


class GatedBackend(FakeBackend):
    """Holds every call placement until `release` is set."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.release = asyncio.Event()

    async def place_call(self, caller: str, callee: str) -> CallResponse:
        self.requests.append(("place_call", caller, callee))
        await self.release.wait()
        return self.call_response


class RecordingObserver:
    def __init__(self) -> None:
        self.snapshots = []

    def on_state_changed(self, snapshot) -> None:
        self.snapshots.append(snapshot)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture(scope="session")
def app():
    os.environ["PARTICIPANT_COUNT"] = "3"
    os.environ["ADDRESS_SEED"] = "7"
    os.environ["LOG_LEVEL"] = "DEBUG"

    import importlib

    # Ensure clean import with the test settings.
    for module_name in [
        "config.settings",
        "api.dependencies",
        "api.routes",
        "main",
    ]:
        sys.modules.pop(module_name, None)

    main = importlib.import_module("main")
    return main.app


@pytest.fixture()
def exchange():
    from api.dependencies import build_exchange
    from telephony.network import Network

    return build_exchange(Network.from_addresses(["111", "222", "333"]), history_size=50)


@pytest.fixture()
def client(app, exchange):
    import api.dependencies as deps

    app.dependency_overrides[deps.get_exchange] = lambda: exchange

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()

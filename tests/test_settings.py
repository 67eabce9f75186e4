from __future__ import annotations

import pytest
from pydantic import ValidationError

from config.settings import Settings


def test_defaults_match_four_line_network(monkeypatch):
    monkeypatch.delenv("PARTICIPANT_COUNT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.participant_count == 4
    assert settings.signaling_delay_seconds == 0.0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PARTICIPANT_COUNT", "12")
    monkeypatch.setenv("SIGNALING_DELAY_SECONDS", "0.25")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)
    assert settings.participant_count == 12
    assert settings.signaling_delay_seconds == 0.25
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("count", ["0", "901"])
def test_participant_count_is_bounded(monkeypatch, count):
    monkeypatch.setenv("PARTICIPANT_COUNT", count)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("level", ["WARN", "TRACE", "verbose"])
def test_log_level_rejects_names_uvicorn_does_not_know(monkeypatch, level):
    monkeypatch.setenv("LOG_LEVEL", level)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_participant_count_bound_follows_address_space(monkeypatch):
    from telephony.network import ADDRESS_SPACE

    monkeypatch.setenv("PARTICIPANT_COUNT", str(ADDRESS_SPACE))
    assert Settings(_env_file=None).participant_count == ADDRESS_SPACE

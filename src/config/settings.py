"""Application-wide configuration loading and validation."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from telephony.network import ADDRESS_SPACE

# Level names understood by both `logging` and uvicorn.
LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    environment: Literal["local", "dev", "prod"] = Field(default="local")
    log_level: LogLevel = Field(default="INFO")

    # HTTP control surface
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000, ge=1, le=65535)

    # Network
    participant_count: int = Field(
        default=4,
        ge=1,
        le=ADDRESS_SPACE,
        description="Number of lines created when the network is built.",
    )
    address_seed: int | None = Field(
        default=None,
        description="Optional seed for address generation (reproducible numbering).",
    )
    signaling_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        description="Simulated latency applied at every routing hop.",
    )

    # State-change log
    event_history_size: int = Field(
        default=200,
        ge=1,
        description="How many state changes are kept in memory for /events.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()

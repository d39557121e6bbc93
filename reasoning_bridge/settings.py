"""reasoning_bridge/settings.py

Runtime configuration loaded from environment variables / .env file.

Configure via environment variables:
  EXA_API_KEY    Exa API key (required)
  EXA_BASE_URL   Exa API root (default: https://api.exa.ai)
  LOG_LEVEL      DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
"""

from __future__ import annotations

# Standard Library
from typing import Literal

# Third-Party Libraries
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Local Modules
from reasoning_bridge.search import DEFAULT_BASE_URL

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BridgeSettings(BaseSettings):
    """Settings for the reasoning-bridge server.

    Attributes:
        exa_api_key: Pre-shared credential for the Exa search API.
        exa_base_url: Exa API root URL.
        log_level: Level name passed to ``logging.basicConfig``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    exa_api_key: str = Field(
        ...,
        min_length=1,
        description="Exa API key, sent as the x-api-key header.",
    )
    exa_base_url: str = Field(
        DEFAULT_BASE_URL,
        description="Root URL of the Exa API.",
    )
    log_level: LogLevel = Field(
        "INFO",
        description="Logging level for the server process (case-insensitive).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

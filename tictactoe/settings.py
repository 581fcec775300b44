"""
Central application configuration using pydantic-settings.

This module provides typed access to environment-based configuration for:
- The FastAPI game server (bind address, logging, CORS)
- The terminal client (server URL, polling cadence, HTTP timeout)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def normalize_log_level(value: str) -> str:
    level = str(value).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {value}")
    return level


class ServerSettings(BaseSettings):
    """
    Configuration for the game server.

    Environment variables (prefix: TTT_):
        TTT_HOST         - Bind address (default: 127.0.0.1)
        TTT_PORT         - Bind port (default: 3000)
        TTT_LOG_LEVEL    - Logging level name (default: INFO)
        TTT_RELOAD       - Enable uvicorn auto-reload (default: false)
        TTT_CORS_ORIGINS - JSON list of allowed origins (default: ["*"])
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="TTT_",
    )

    host: str = Field(default="127.0.0.1", description="Address uvicorn binds to.")
    port: int = Field(default=3000, ge=1, le=65535, description="Port uvicorn binds to.")
    log_level: str = Field(default="INFO", description="Root logging level.")
    reload: bool = Field(default=False, description="Restart the server on code changes.")
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        return normalize_log_level(value)


class ClientSettings(BaseSettings):
    """
    Configuration for the terminal client.

    Environment variables (prefix: TTT_CLIENT_):
        TTT_CLIENT_BASE_URL              - Game server URL (default: http://localhost:3000)
        TTT_CLIENT_POLL_INTERVAL_SECONDS - Delay between state polls (default: 1.0)
        TTT_CLIENT_WAIT_PROMPT_POLLS     - Polls before asking whether to keep waiting (default: 15)
        TTT_CLIENT_TIMEOUT_SECONDS       - HTTP request timeout (default: 5.0)
        TTT_CLIENT_CLIENT_NAME           - Label sent when starting solo games
        TTT_CLIENT_LOG_LEVEL             - Logging level name (default: WARNING)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="TTT_CLIENT_",
    )

    base_url: str = Field(default="http://localhost:3000", description="Base URL of the game server.")
    poll_interval_seconds: float = Field(default=1.0, gt=0, description="Seconds between state polls.")
    wait_prompt_polls: int = Field(default=15, ge=1, description="Polls before offering to stop waiting.")
    timeout_seconds: float = Field(default=5.0, gt=0, description="HTTP request timeout in seconds.")
    client_name: str = Field(default="python-terminal-client", description="Label for solo games.")
    log_level: str = Field(default="WARNING", description="Root logging level.")

    @field_validator("base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        return normalize_log_level(value)


@lru_cache
def get_server_settings() -> ServerSettings:
    """Return cached server settings instance."""
    return ServerSettings()


@lru_cache
def get_client_settings() -> ClientSettings:
    """Return cached client settings instance."""
    return ClientSettings()

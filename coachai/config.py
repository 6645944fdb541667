"""Client configuration and logging setup.

Settings come from environment variables so the same client can point at a
local development service or a tunnelled one without code changes.
"""

import json
import logging
import os
import sys
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://localhost:7073"
DEFAULT_DATABASE_PATH = "./data/coachai.db"
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Sent with every request; lets the service run behind an ngrok tunnel
DEFAULT_EXTRA_HEADERS = {"ngrok-skip-browser-warning": "6131"}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ClientSettings(BaseModel):
    """Runtime settings for the CoachAI client."""

    base_url: str = Field(DEFAULT_BASE_URL, description="Coaching service root URL")
    database_path: str = Field(
        DEFAULT_DATABASE_PATH, description="SQLite file holding the persisted session"
    )
    request_timeout: float | None = Field(
        DEFAULT_REQUEST_TIMEOUT,
        description="Per-request timeout in seconds; None waits forever",
    )
    verify_tls: bool = Field(True, description="Verify the service TLS certificate")
    auto_refresh: bool = Field(
        False, description="Refresh the access token and retry once on HTTP 401"
    )
    extra_headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_EXTRA_HEADERS),
        description="Additional headers sent with every request",
    )
    secrets_key: str | None = Field(
        None, repr=False, description="Key material for encrypting stored tokens"
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("request_timeout must be positive")
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientSettings":
        """Build settings from COACHAI_* environment variables."""
        values: dict[str, Any] = {
            "base_url": os.getenv("COACHAI_BASE_URL", DEFAULT_BASE_URL),
            "database_path": os.getenv("COACHAI_DATABASE_PATH", DEFAULT_DATABASE_PATH),
            "verify_tls": _env_bool("COACHAI_VERIFY_TLS", True),
            "auto_refresh": _env_bool("COACHAI_AUTO_REFRESH", False),
            "secrets_key": os.getenv("COACHAI_SECRETS_KEY"),
        }

        timeout = os.getenv("COACHAI_REQUEST_TIMEOUT")
        if timeout is not None:
            values["request_timeout"] = (
                None if timeout.strip().lower() in ("", "none", "0") else float(timeout)
            )

        headers = os.getenv("COACHAI_EXTRA_HEADERS")
        if headers:
            try:
                values["extra_headers"] = json.loads(headers)
            except json.JSONDecodeError as e:
                raise ValueError(f"COACHAI_EXTRA_HEADERS is not valid JSON: {e}") from e

        values.update(overrides)
        return cls(**values)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )

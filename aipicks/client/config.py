"""Shared client constants and settings.

This module centralizes URLs, paths and defaults used by the REST clients,
the live channel and the series feed so the rest of the package stays small
and focused.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Backend serving picks, candles and account data
DEFAULT_API_URL = "http://localhost:3000"

# External pattern detection service
DEFAULT_PATTERN_SERVICE_URL = "http://localhost:8003"

# Live bar channel; {symbol} is filled per subscription
DEFAULT_LIVE_URL_TEMPLATE = "ws://localhost:8003/ws/{symbol}"

# Auth is stubbed to a static token until the backend ships real sign-in
STATIC_AUTH_TOKEN = "demo_token"
DEMO_USER_ID = "demo-user"
DEMO_USER_EMAIL = "demo@example.com"

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_SERIES_CAPACITY = 100
DEFAULT_PICKS_LIMIT = 100

# REST paths
CANDLES_PATH = "/api/market/candles"
TOP_PICKS_PATH = "/api/ml/screen"
DETECT_PATH = "/detect"
PATTERN_TYPES_PATH = "/patterns/types"

ENV_PREFIX = "AIPICKS_"

# Short environment names that differ from the field they set
_ENV_ALIASES = {
    "PATTERN_URL": "pattern_service_url",
    "LIVE_URL": "live_url_template",
}


class ClientSettings(BaseSettings):
    """Endpoints and defaults for a StockPicksClient.

    Every field can be set from an ``AIPICKS_``-prefixed environment variable,
    e.g. ``AIPICKS_API_URL`` or ``AIPICKS_SERIES_CAPACITY``. The pattern
    service and live channel URLs are read from ``AIPICKS_PATTERN_URL`` and
    ``AIPICKS_LIVE_URL``.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        frozen=True,
        populate_by_name=True,
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = DEFAULT_API_URL
    pattern_service_url: str = Field(
        DEFAULT_PATTERN_SERVICE_URL,
        validation_alias=AliasChoices("AIPICKS_PATTERN_URL", "AIPICKS_PATTERN_SERVICE_URL"),
    )
    live_url_template: str = Field(
        DEFAULT_LIVE_URL_TEMPLATE,
        validation_alias=AliasChoices("AIPICKS_LIVE_URL", "AIPICKS_LIVE_URL_TEMPLATE"),
    )
    auth_token: str | None = STATIC_AUTH_TOKEN
    http_timeout: float = Field(DEFAULT_HTTP_TIMEOUT, gt=0)
    series_capacity: int = Field(DEFAULT_SERIES_CAPACITY, ge=1)
    picks_limit: int = Field(DEFAULT_PICKS_LIMIT, ge=1)
    user_email: str = DEMO_USER_EMAIL
    extra_headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("auth_token", mode="before")
    @classmethod
    def _empty_token_disables_auth(cls, v):
        return v or None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Build settings from ``AIPICKS_*`` variables.

        With no mapping the process environment is read. Variables missing
        from ``environ`` fall back to the process environment, then to the
        module defaults. Invalid values raise pydantic's ValidationError.
        """
        if environ is None:
            return cls()
        overrides: dict[str, str] = {}
        for name, value in environ.items():
            if not name.upper().startswith(ENV_PREFIX):
                continue
            suffix = name[len(ENV_PREFIX) :].upper()
            overrides[_ENV_ALIASES.get(suffix, suffix.lower())] = value
        return cls(**overrides)

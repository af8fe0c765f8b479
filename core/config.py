# =============================================================================
# core/config.py  —  Process-wide settings read from the environment
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns environment variables into a frozen Settings value.  The entry
#   points (main.py, tools/mcp_server.py) call load_dotenv() first, so a
#   local .env file works the same as exported variables.
#
#   DIXA_API_KEY        (required)  raw API key sent as the Authorization header
#   DIXA_API_BASE_URL   (optional)  defaults to https://dev.dixa.io/v1
#   DIXA_HTTP_TIMEOUT   (optional)  seconds per request, defaults to 30
#
#   load_settings() reads os.environ every time it is called.  The API key is
#   NOT checked here; require_api_key() checks it per invocation so that a
#   missing key fails the call, not the server start-up.
# =============================================================================

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigurationError

#: Environment variable names
DIXA_API_KEY_ENV = "DIXA_API_KEY"
DIXA_BASE_URL_ENV = "DIXA_API_BASE_URL"
DIXA_TIMEOUT_ENV = "DIXA_HTTP_TIMEOUT"

DEFAULT_BASE_URL = "https://dev.dixa.io/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    """Read-only configuration handed to every tool invocation."""

    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``environ`` (defaults to ``os.environ``).

    Raises:
        ConfigurationError: If DIXA_HTTP_TIMEOUT is set but not a positive number.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get(DIXA_API_KEY_ENV) or "").strip() or None
    base_url = (env.get(DIXA_BASE_URL_ENV) or "").strip() or DEFAULT_BASE_URL

    raw_timeout = (env.get(DIXA_TIMEOUT_ENV) or "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"{DIXA_TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}"
            ) from exc
        if timeout <= 0:
            raise ConfigurationError(f"{DIXA_TIMEOUT_ENV} must be positive, got {raw_timeout!r}")
    else:
        timeout = DEFAULT_TIMEOUT_SECONDS

    return Settings(api_key=api_key, base_url=base_url.rstrip("/"), timeout_seconds=timeout)


def require_api_key(settings: Settings) -> str:
    """Return the API key or fail before anything touches the network."""
    if not settings.api_key:
        raise ConfigurationError(f"{DIXA_API_KEY_ENV} environment variable is not set")
    return settings.api_key

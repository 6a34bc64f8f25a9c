"""Central configuration defaults for the Strava client.

All values are constants read once at import time. Secrets and tunables are
read from environment variables (optionally via a local `.env`). Runtime
state such as the access token lives on :class:`strava_kit.client.configuration.StravaConfig`,
never here.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# Strava settings
# ---------------------------------------------------------------------------
# Host all resource paths are resolved against. Paths carry the /api/v3 prefix.
STRAVA_BASE_URL = os.getenv("STRAVA_BASE_URL", "https://www.strava.com")
STRAVA_OAUTH_AUTHORIZE_URL = "https://www.strava.com/oauth/authorize"

# Client credentials pulled from the environment. Do not hardcode secrets.
CLIENT_ID = os.getenv("STRAVA_CLIENT_ID", "")
CLIENT_SECRET = os.getenv("STRAVA_CLIENT_SECRET", "")

# Log every request (method, path, masked params) at INFO when True.
STRAVA_DEBUG = _env_bool("STRAVA_DEBUG", False)


# ---------------------------------------------------------------------------
# Performance tuning
# ---------------------------------------------------------------------------
# Worker threads running transport calls.
STRAVA_MAX_WORKERS = _env_int("STRAVA_MAX_WORKERS", 4)

# HTTP session pool sizes for concurrent requests.
HTTP_POOL_CONNECTIONS = _env_int("HTTP_POOL_CONNECTIONS", 10)
HTTP_POOL_MAXSIZE = _env_int("HTTP_POOL_MAXSIZE", 10)

# Request timeout in seconds.
REQUEST_TIMEOUT = _env_float("REQUEST_TIMEOUT", 15.0)


# ---------------------------------------------------------------------------
# Rate limit signal
# ---------------------------------------------------------------------------
# Log an "approaching limit" notice when short-window usage is this close to
# the limit. Advisory only; requests are never delayed.
RATE_LIMIT_NEAR_LIMIT_BUFFER = _env_int("RATE_LIMIT_NEAR_LIMIT_BUFFER", 3)

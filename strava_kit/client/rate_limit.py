"""Rate limit signal parsed from Strava response headers.

Strava reports two windows (15 minute, daily) as ``"short,long"`` pairs in
``X-RateLimit-Limit`` and ``X-RateLimit-Usage``. The monitor republishes them
to listeners; it never delays, queues or rejects a request.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Tuple

from ..config import RATE_LIMIT_NEAR_LIMIT_BUFFER

LOGGER = logging.getLogger(__name__)

__all__ = ["RateLimitMonitor", "RateLimitUpdate", "parse_rate_limit_headers"]

RATE_LIMIT_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_USAGE_HEADER = "X-RateLimit-Usage"


@dataclass(frozen=True)
class RateLimitUpdate:
    limit: Tuple[int, int]
    usage: Tuple[int, int]

    @property
    def short_remaining(self) -> int:
        return self.limit[0] - self.usage[0]

    @property
    def long_remaining(self) -> int:
        return self.limit[1] - self.usage[1]


RateLimitListener = Callable[[RateLimitUpdate], None]


def _header(headers: Mapping[str, object], name: str) -> Optional[str]:
    lowered = name.lower()
    for key, value in headers.items():
        if str(key).lower() == lowered:
            return str(value)
    return None


def _pair(raw: str) -> Tuple[int, int]:
    first, second = raw.split(",")
    return int(first.strip()), int(second.strip())


def parse_rate_limit_headers(
    headers: Optional[Mapping[str, object]],
) -> Optional[RateLimitUpdate]:
    """Return the update carried by ``headers`` or None when absent/garbled."""

    if not headers:
        return None
    limit = _header(headers, RATE_LIMIT_LIMIT_HEADER)
    usage = _header(headers, RATE_LIMIT_USAGE_HEADER)
    if not limit or not usage:
        return None
    try:
        return RateLimitUpdate(limit=_pair(limit), usage=_pair(usage))
    except ValueError as exc:
        LOGGER.debug(
            "Failed to parse rate limit headers usage=%s limit=%s: %s",
            usage,
            limit,
            exc,
        )
        return None


class RateLimitMonitor:
    """Publishes "rate limit updated" events to subscribed listeners."""

    def __init__(self, near_limit_buffer: int = RATE_LIMIT_NEAR_LIMIT_BUFFER) -> None:
        self._lock = threading.Lock()
        self._listeners: List[RateLimitListener] = []
        self._latest: Optional[RateLimitUpdate] = None
        self._near_limit_buffer = near_limit_buffer

    def subscribe(self, listener: RateLimitListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: RateLimitListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    @property
    def latest(self) -> Optional[RateLimitUpdate]:
        with self._lock:
            return self._latest

    def after_response(
        self, headers: Optional[Mapping[str, object]], status_code: Optional[int]
    ) -> Optional[RateLimitUpdate]:
        if status_code == 429:
            LOGGER.warning("Rate limit: 429 returned by Strava.")
        update = parse_rate_limit_headers(headers)
        if update is None:
            return None
        short_used, short_limit = update.usage[0], update.limit[0]
        if short_used >= max(short_limit - self._near_limit_buffer, 0):
            LOGGER.info(
                "Approaching short-window limit (%s/%s).", short_used, short_limit
            )
        with self._lock:
            self._latest = update
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(update)
            except Exception:  # listeners must not break the call
                LOGGER.exception("Rate limit listener %r failed", listener)
        return update

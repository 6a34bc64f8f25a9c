"""Explicit configuration shared by every call issued through one client."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .. import config
from ..models import Athlete
from ..utils import mask_token
from .transport import RequestsTransport, Transport

LOGGER = logging.getLogger(__name__)

# "worker" runs callbacks on the thread that completed the call; an Executor
# runs them on that fixed dispatch context instead.
CallbackDispatch = Union[str, Executor]
WORKER_DISPATCH = "worker"


@dataclass(frozen=True)
class ConfigSnapshot:
    """Immutable view of the configuration taken at the start of one call."""

    access_token: Optional[str]
    athlete: Optional[Athlete]
    transport: Transport
    base_url: str
    timeout: float
    debug: bool
    callback_dispatch: CallbackDispatch


class StravaConfig:
    """Token, athlete profile, debug flag and transport for one client.

    Writes go through :meth:`configure` / :meth:`clear`; every call reads a
    :class:`ConfigSnapshot` under the same lock, so reconfiguring while calls
    are being issued never exposes a half-updated state.
    """

    def __init__(
        self,
        *,
        access_token: Optional[str] = None,
        athlete_dict: Optional[Mapping[str, Any]] = None,
        transport: Optional[Transport] = None,
        base_url: str = config.STRAVA_BASE_URL,
        timeout: float = config.REQUEST_TIMEOUT,
        debug: bool = config.STRAVA_DEBUG,
        callback_dispatch: CallbackDispatch = WORKER_DISPATCH,
        client_id: str = config.CLIENT_ID,
        client_secret: str = config.CLIENT_SECRET,
    ) -> None:
        self._lock = threading.RLock()
        self._default_transport: Transport = RequestsTransport()
        self._alternate_transport: Optional[Transport] = transport
        self._access_token = access_token
        self._athlete = Athlete.from_dict(athlete_dict) if athlete_dict else None
        self._debug = debug
        self.base_url = base_url
        self.timeout = timeout
        self.callback_dispatch = callback_dispatch
        self.client_id = client_id
        self.client_secret = client_secret

    # --- Mutation -------------------------------------------------------
    def configure(
        self,
        access_token: Optional[str],
        athlete_dict: Optional[Mapping[str, Any]] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        """Replace token, athlete and alternate transport in one step.

        An empty or invalid ``athlete_dict`` leaves no athlete configured;
        ``transport=None`` restores the default transport.
        """

        athlete = Athlete.from_dict(athlete_dict) if athlete_dict else None
        with self._lock:
            self._access_token = access_token
            self._athlete = athlete
            self._alternate_transport = transport
        LOGGER.info(
            "Configured Strava client token=%s athlete=%s transport=%s",
            mask_token(access_token),
            athlete.athlete_id if athlete else None,
            type(transport).__name__ if transport else "default",
        )

    def update_athlete(self, athlete: Optional[Athlete]) -> None:
        with self._lock:
            self._athlete = athlete

    def update_access_token(self, access_token: Optional[str]) -> None:
        with self._lock:
            self._access_token = access_token
        LOGGER.info("Updated Strava access token=%s", mask_token(access_token))

    def clear(self) -> None:
        """Forget the access token and athlete profile."""

        with self._lock:
            self._access_token = None
            self._athlete = None
        LOGGER.info("Cleared Strava access data")

    # --- Reads ----------------------------------------------------------
    @property
    def debug(self) -> bool:
        with self._lock:
            return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        with self._lock:
            self._debug = value

    @property
    def access_token(self) -> Optional[str]:
        with self._lock:
            return self._access_token

    @property
    def athlete(self) -> Optional[Athlete]:
        with self._lock:
            return self._athlete

    @property
    def is_authorized(self) -> bool:
        with self._lock:
            return self._access_token is not None and self._athlete is not None

    @property
    def alternate_transport(self) -> Optional[Transport]:
        with self._lock:
            return self._alternate_transport

    @property
    def transport(self) -> Transport:
        with self._lock:
            return self._alternate_transport or self._default_transport

    def snapshot(self) -> ConfigSnapshot:
        with self._lock:
            return ConfigSnapshot(
                access_token=self._access_token,
                athlete=self._athlete,
                transport=self._alternate_transport or self._default_transport,
                base_url=self.base_url,
                timeout=self.timeout,
                debug=self._debug,
                callback_dispatch=self.callback_dispatch,
            )

    def close(self) -> None:
        if isinstance(self._default_transport, RequestsTransport):
            self._default_transport.close()

"""Strava API client: configuration, the generic request and resource groups.

Public surface:
- Strava(config=None).configure(access_token, athlete_dict=None, transport=None)
- Strava.request(method, path, authenticated, params=None, identifier=None, callback=None)
- Strava.athletes / activities / segments / routes / uploads / oauth
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .client.activities import ActivitiesAPI
from .client.athletes import AthletesAPI
from .client.configuration import StravaConfig
from .client.envelope import HTTPMethod, RequestEnvelope
from .client.handle import Completion, RequestHandle
from .client.oauth import OAuthAPI
from .client.rate_limit import RateLimitListener, RateLimitMonitor
from .client.requestor import Requestor
from .client.routes import RoutesAPI
from .client.segments import SegmentsAPI
from .client.transport import Transport
from .client.uploads import UploadsAPI
from .config import STRAVA_MAX_WORKERS
from .errors import UnsupportedRequestError
from .models import Athlete


class Strava:
    """Owns one configuration and the worker pool its calls run on."""

    def __init__(
        self,
        config: Optional[StravaConfig] = None,
        *,
        monitor: Optional[RateLimitMonitor] = None,
        max_workers: int = STRAVA_MAX_WORKERS,
    ) -> None:
        self.config = config or StravaConfig()
        self._requestor = Requestor(self.config, monitor=monitor, max_workers=max_workers)
        self.athletes = AthletesAPI(self._requestor)
        self.activities = ActivitiesAPI(self._requestor)
        self.segments = SegmentsAPI(self._requestor)
        self.routes = RoutesAPI(self._requestor)
        self.uploads = UploadsAPI(self._requestor)
        self.oauth = OAuthAPI(self._requestor)

    # --- Configuration --------------------------------------------------
    def configure(
        self,
        access_token: Optional[str],
        athlete_dict: Optional[Mapping[str, Any]] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self.config.configure(access_token, athlete_dict, transport)

    def clear(self) -> None:
        self.config.clear()

    @property
    def is_authorized(self) -> bool:
        return self.config.is_authorized

    @property
    def current_athlete(self) -> Optional[Athlete]:
        return self.config.athlete

    @property
    def debug(self) -> bool:
        return self.config.debug

    @debug.setter
    def debug(self, value: bool) -> None:
        self.config.debug = value

    # --- Rate limit signal ----------------------------------------------
    @property
    def rate_limits(self) -> RateLimitMonitor:
        return self._requestor.monitor

    def on_rate_limit(self, listener: RateLimitListener) -> None:
        self._requestor.monitor.subscribe(listener)

    # --- Requests -------------------------------------------------------
    def request(
        self,
        method: HTTPMethod | str,
        path: str,
        authenticated: bool = True,
        params: Optional[Mapping[str, Any]] = None,
        identifier: Optional[int | str] = None,
        callback: Optional[Completion] = None,
    ) -> RequestHandle:
        """Issue one call; the handle resolves to the decoded JSON body.

        Method names are case-insensitive. Anything other than GET, POST or
        PUT resolves with UnsupportedRequestError without being sent.
        """

        try:
            http_method = HTTPMethod(str(getattr(method, "value", method)).upper())
        except ValueError:
            return self._requestor.failed(
                f"{method} {path}",
                UnsupportedRequestError(f"Unsupported HTTP method {method!r}"),
                callback,
            )
        envelope = RequestEnvelope(
            http_method,
            path,
            authenticated,
            params=params,
            identifier=identifier,
        )
        return self._requestor.request(envelope, callback)

    # --- Lifecycle ------------------------------------------------------
    def close(self) -> None:
        self._requestor.close()
        self.config.close()

    def __enter__(self) -> "Strava":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

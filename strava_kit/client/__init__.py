"""Modular Strava client components (envelope, transport, rate limit signal, resources)."""

from .configuration import StravaConfig  # noqa: F401
from .envelope import HTTPMethod, RequestEnvelope  # noqa: F401
from .handle import RequestHandle  # noqa: F401
from .rate_limit import RateLimitMonitor, RateLimitUpdate  # noqa: F401
from .requestor import Requestor  # noqa: F401
from .transport import (  # noqa: F401
    RequestsTransport,
    Transport,
    TransportRequest,
    TransportResponse,
)

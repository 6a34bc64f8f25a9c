"""Strava API v3 client."""

from .client import (
    HTTPMethod,
    RateLimitUpdate,
    RequestHandle,
    StravaConfig,
    TransportRequest,
    TransportResponse,
)
from .errors import StravaAPIError, StravaErrorCode
from .models import Activity, Athlete, Route, Segment, UploadStatus
from .strava import Strava

__all__ = [
    "Activity",
    "Athlete",
    "HTTPMethod",
    "RateLimitUpdate",
    "RequestHandle",
    "Route",
    "Segment",
    "Strava",
    "StravaAPIError",
    "StravaConfig",
    "StravaErrorCode",
    "TransportRequest",
    "TransportResponse",
    "UploadStatus",
]

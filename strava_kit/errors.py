"""Central error types used across the client."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class StravaErrorCode(IntEnum):
    """Error kinds surfaced by every call."""

    REMOTE_ERROR = 501
    MISSING_CREDENTIALS = 502
    NO_ACCESS_TOKEN = 503
    NO_RESPONSE = 504
    INVALID_RESPONSE = 505
    RECORD_NOT_FOUND = 506
    RATE_LIMIT_EXCEEDED = 507
    ACCESS_FORBIDDEN = 508
    UNSUPPORTED_REQUEST = 509
    INVALID_URL = 510
    CANCELLED = 511
    UNDEFINED_ERROR = 599


class StravaAPIError(RuntimeError):
    """Base error for Strava API failures.

    ``status`` and ``body`` are only set when the failure came back from the
    remote service and are kept for diagnostics.
    """

    code: StravaErrorCode = StravaErrorCode.UNDEFINED_ERROR

    def __init__(
        self,
        reason: str,
        *,
        status: Optional[int] = None,
        body: Optional[bytes] = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status = status
        self.body = body

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={int(self.code)}, reason={self.reason!r})"


class StravaRemoteError(StravaAPIError):
    """Raised for any non-success status without a more specific kind."""

    code = StravaErrorCode.REMOTE_ERROR


class MissingCredentialsError(StravaAPIError):
    """Raised when an authenticated call is attempted without a token."""

    code = StravaErrorCode.MISSING_CREDENTIALS


class NoAccessTokenError(StravaAPIError):
    """Raised when an operation explicitly needs the held access token."""

    code = StravaErrorCode.NO_ACCESS_TOKEN


class NoResponseError(StravaAPIError):
    """Raised when the transport returned no body or failed outright."""

    code = StravaErrorCode.NO_RESPONSE


class InvalidResponseError(StravaAPIError):
    """Raised when a body is present but not the expected JSON shape."""

    code = StravaErrorCode.INVALID_RESPONSE


class StravaResourceNotFoundError(StravaAPIError):
    """Raised when a segment, activity, athlete or upload does not exist."""

    code = StravaErrorCode.RECORD_NOT_FOUND


class RateLimitExceededError(StravaAPIError):
    """Raised when Strava answers 429."""

    code = StravaErrorCode.RATE_LIMIT_EXCEEDED


class StravaPermissionError(StravaAPIError):
    """Raised when the API reports insufficient scopes or authentication issues."""

    code = StravaErrorCode.ACCESS_FORBIDDEN


class StravaPaymentRequiredError(StravaPermissionError):
    """Raised when Strava returns HTTP 402 for subscription-only resources."""


class UnsupportedRequestError(StravaAPIError):
    """Raised when the resource does not support the operation."""

    code = StravaErrorCode.UNSUPPORTED_REQUEST


class InvalidURLError(StravaAPIError):
    """Raised when a path does not resolve to an absolute http(s) URL."""

    code = StravaErrorCode.INVALID_URL


class StravaCancelledError(StravaAPIError):
    """Delivered in place of a result when the caller cancelled the call."""

    code = StravaErrorCode.CANCELLED


class StravaUndefinedError(StravaAPIError):
    """Catch-all, also used for errors embedded in a successful body."""

    code = StravaErrorCode.UNDEFINED_ERROR


__all__ = [
    "StravaErrorCode",
    "StravaAPIError",
    "StravaRemoteError",
    "MissingCredentialsError",
    "NoAccessTokenError",
    "NoResponseError",
    "InvalidResponseError",
    "StravaResourceNotFoundError",
    "RateLimitExceededError",
    "StravaPermissionError",
    "StravaPaymentRequiredError",
    "UnsupportedRequestError",
    "InvalidURLError",
    "StravaCancelledError",
    "StravaUndefinedError",
]

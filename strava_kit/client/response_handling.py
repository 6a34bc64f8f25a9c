"""Shared HTTP response helpers for Strava API interactions."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from ..errors import (
    InvalidResponseError,
    NoResponseError,
    RateLimitExceededError,
    StravaAPIError,
    StravaPaymentRequiredError,
    StravaPermissionError,
    StravaRemoteError,
    StravaResourceNotFoundError,
    UnsupportedRequestError,
)
from .transport import TransportResponse

LOGGER = logging.getLogger(__name__)

__all__ = [
    "classify_response_status",
    "decode_body",
    "extract_error",
    "normalize_response",
]


def classify_response_status(
    response: TransportResponse, context: str
) -> Optional[StravaAPIError]:
    """Return the error for a non-success status, or None for 2xx."""

    status = response.status
    if 200 <= status < 300:
        return None

    detail = extract_error(response.body)

    def with_detail(message: str) -> str:
        return f"{message} | {detail}" if detail else message

    kwargs: Dict[str, Any] = {"status": status, "body": response.body}

    if status == 429:
        message = with_detail(f"{context} rate limit exceeded")
        LOGGER.warning(message)
        return RateLimitExceededError(message, **kwargs)

    if status == 402:
        message = with_detail(f"{context} requires a Strava subscription")
        LOGGER.warning(message)
        return StravaPaymentRequiredError(message, **kwargs)

    if status in (401, 403):
        message = with_detail(f"{context} forbidden")
        LOGGER.warning(message)
        return StravaPermissionError(message, **kwargs)

    if status == 404:
        message = with_detail(f"{context} not found")
        LOGGER.info(message)
        return StravaResourceNotFoundError(message, **kwargs)

    if status in (405, 501):
        message = with_detail(f"{context} not supported (status {status})")
        LOGGER.warning(message)
        return UnsupportedRequestError(message, **kwargs)

    message = with_detail(f"{context} request failed (status {status})")
    LOGGER.error(message)
    return StravaRemoteError(message, **kwargs)


def decode_body(body: Optional[bytes], context: str) -> Any:
    """Decode a success body into a JSON object or array.

    Raises:
        NoResponseError: no body.
        InvalidResponseError: not JSON, or JSON that is neither object nor array.
    """

    if not body:
        raise NoResponseError(f"{context} returned no body")
    data = _safe_json(body)
    if not isinstance(data, (dict, list)):
        raise InvalidResponseError(
            f"{context} returned non-JSON payload", body=body
        )
    return data


def normalize_response(response: TransportResponse, context: str) -> Any:
    """Return the decoded body for a success response, else raise its error."""

    error = classify_response_status(response, context)
    if error is not None:
        raise error
    return decode_body(response.body, context)


def extract_error(body: Optional[bytes]) -> Optional[str]:
    """Return compact string with Strava error info (message + codes) if present."""

    if not body:
        return None
    data = _safe_json(body)
    if data is None:
        return _extract_error_text(body)
    if not isinstance(data, dict):
        return None
    parts = _collect_error_parts(data)
    return " | ".join(parts) if parts else None


def _safe_json(body: bytes) -> Optional[Any]:
    """Safely parse JSON; return None if parsing fails."""

    try:
        return json.loads(body)
    except ValueError as exc:
        LOGGER.debug("Failed to decode JSON body: %s", exc)
        return None


def _extract_error_text(body: bytes) -> Optional[str]:
    """Best-effort plain-text extraction when JSON parsing fails."""

    trimmed = body.decode("utf-8", errors="replace").strip()
    if not trimmed:
        return None
    return (trimmed[:297] + "...") if len(trimmed) > 300 else trimmed


def _collect_error_parts(data: Dict[str, Any]) -> List[str]:
    """Build error snippets from the standard Strava error response."""

    parts: List[str] = []
    message = data.get("message")
    if message:
        parts.append(str(message))
    errors = data.get("errors")
    if isinstance(errors, list):
        for err in errors:
            if not isinstance(err, dict):
                continue
            resource = err.get("resource")
            field = err.get("field")
            code = err.get("code")
            spec = "/".join(filter(None, (resource, field)))
            if code and spec:
                parts.append(f"{spec}:{code}")
            elif code:
                parts.append(str(code))
    return parts

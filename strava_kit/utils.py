"""General helpers shared across modules: URL building, dates, masking."""

from __future__ import annotations

import re
import urllib.parse
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from .errors import InvalidURLError

ID_PLACEHOLDER = ":id"

# Placeholder must fill a whole path segment; ":identity" stays untouched.
_ID_PATTERN = re.compile(r"(?<=/):id(?=/|\?|$)")

_ALLOWED_SCHEMES = {"http", "https"}


def replace_id(path: str, identifier: int | str) -> str:
    """Substitute ``identifier`` for the ``:id`` segment of ``path``."""

    replacement = str(identifier)
    return _ID_PATTERN.sub(lambda _match: replacement, path)


def query_value(value: Any) -> str:
    """Coerce a parameter value to its query-string form."""

    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(query_value(item) for item in value)
    return str(value)


def url_with_string(
    string: Optional[str], params: Optional[Mapping[str, Any]] = None
) -> str:
    """Return an absolute http(s) URL for ``string`` with ``params`` appended.

    Raises:
        InvalidURLError: the string is empty, malformed or not http(s).
    """

    if not string:
        raise InvalidURLError("URL string is empty")
    try:
        parts = urllib.parse.urlsplit(string)
    except ValueError as exc:
        raise InvalidURLError(f"Malformed URL: {string!r}") from exc
    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.netloc:
        raise InvalidURLError(f"Unsupported URL: {string!r}")
    if not params:
        return string

    items = urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    items.extend(
        (str(key), query_value(value))
        for key, value in params.items()
        if value is not None
    )
    query = urllib.parse.urlencode(items)
    return urllib.parse.urlunsplit(
        (parts.scheme, parts.netloc, parts.path, query, parts.fragment)
    )


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse Strava's ISO-8601 timestamps (``2016-08-18T19:34:12Z``)."""

    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def mask_token(value: Optional[str], visible: int = 4) -> str:
    """Return ``value`` with all but the trailing ``visible`` chars masked."""

    if not value:
        return ""
    tail = value[-visible:] if visible > 0 else ""
    return f"****{tail}"


_SECRET_KEYS = {"access_token", "refresh_token", "client_secret", "code"}


def mask_params(params: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    """Copy of ``params`` safe for logging."""

    if not params:
        return {}
    return {
        key: mask_token(str(value)) if key in _SECRET_KEYS else value
        for key, value in params.items()
    }

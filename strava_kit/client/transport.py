"""Pluggable HTTP transport for Strava API calls.

The envelope only ever talks to a :class:`Transport`. The default
:class:`RequestsTransport` wraps a pooled ``requests.Session``; tests and
alternate environments install their own implementation through
``StravaConfig.configure(transport=...)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol

import requests
from requests import Session
from requests.adapters import HTTPAdapter

from ..config import HTTP_POOL_CONNECTIONS, HTTP_POOL_MAXSIZE
from ..errors import NoResponseError, StravaUndefinedError

LOGGER = logging.getLogger(__name__)

__all__ = [
    "RequestsTransport",
    "Transport",
    "TransportRequest",
    "TransportResponse",
    "UploadFile",
    "create_default_session",
]


@dataclass(frozen=True)
class UploadFile:
    """File attached to a multipart body."""

    path: Path
    field_name: str = "file"

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass
class TransportRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Optional[Dict[str, str]] = None
    upload: Optional[UploadFile] = None
    timeout: Optional[float] = None


@dataclass
class TransportResponse:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


class Transport(Protocol):
    def send(self, request: TransportRequest) -> TransportResponse:
        """Perform ``request`` and return status, headers and raw body."""
        ...


def create_default_session() -> Session:
    session = requests.Session()
    # Retries stay with the caller; the adapter only pools connections.
    adapter = HTTPAdapter(
        pool_connections=HTTP_POOL_CONNECTIONS,
        pool_maxsize=HTTP_POOL_MAXSIZE,
        max_retries=0,
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update(
        {
            "Accept-Encoding": "gzip, deflate",
            "Accept": "application/json",
        }
    )
    return session


class RequestsTransport:
    """Default transport backed by ``requests``."""

    def __init__(self, session: Session | None = None) -> None:
        self._session = session or create_default_session()

    @property
    def session(self) -> Session:
        return self._session

    def send(self, request: TransportRequest) -> TransportResponse:
        kwargs: Dict[str, Any] = {
            "headers": request.headers,
            "timeout": request.timeout,
        }
        if request.data is not None:
            kwargs["data"] = request.data
        try:
            if request.upload is not None:
                with request.upload.path.open("rb") as handle:
                    kwargs["files"] = {
                        request.upload.field_name: (request.upload.filename, handle)
                    }
                    response = self._session.request(
                        request.method, request.url, **kwargs
                    )
            else:
                response = self._session.request(request.method, request.url, **kwargs)
        except requests.RequestException as exc:
            message = f"{request.method} {request.url} failed: {exc.__class__.__name__}"
            LOGGER.warning(message)
            raise NoResponseError(message) from exc
        except OSError as exc:
            message = f"Cannot read upload file {request.upload.path if request.upload else '?'}: {exc}"
            LOGGER.warning(message)
            raise StravaUndefinedError(message) from exc
        return TransportResponse(
            status=response.status_code,
            headers=response.headers,
            body=response.content or None,
        )

    def close(self) -> None:
        self._session.close()

"""One outgoing API call: method, path template, params and auth flag."""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..errors import MissingCredentialsError
from ..utils import query_value, replace_id, url_with_string
from .configuration import ConfigSnapshot
from .transport import TransportRequest, UploadFile

__all__ = ["HTTPMethod", "RequestEnvelope", "auth_headers"]

UPLOAD_PARAM = "file"


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"


def auth_headers(access_token: Optional[str]) -> Dict[str, str]:
    """Return bearer auth headers for ``access_token``."""

    return {"Authorization": f"Bearer {access_token or ''}"}


@dataclass(frozen=True)
class RequestEnvelope:
    method: HTTPMethod
    path: str
    authenticated: bool
    params: Optional[Mapping[str, Any]] = None
    identifier: Optional[int | str] = None

    @property
    def resolved_path(self) -> str:
        if self.identifier is None:
            return self.path
        return replace_id(self.path, self.identifier)

    @property
    def context(self) -> str:
        return f"{self.method.value} {self.resolved_path}"

    def absolute_url(self, base_url: str) -> str:
        """Join a relative path onto ``base_url``; anything with a scheme or host is left as is."""

        path = self.resolved_path
        try:
            parts = urllib.parse.urlsplit(path)
        except ValueError:
            return path
        if parts.scheme or parts.netloc:
            return path
        return base_url.rstrip("/") + "/" + path.lstrip("/")

    def build(self, snapshot: ConfigSnapshot) -> TransportRequest:
        """Turn the envelope into a transport request.

        Raises:
            MissingCredentialsError: authenticated call without a held token.
            InvalidURLError: the path does not resolve to an http(s) URL.
        """

        if self.authenticated and not snapshot.access_token:
            raise MissingCredentialsError(
                f"{self.context} requires an access token"
            )
        headers = auth_headers(snapshot.access_token) if self.authenticated else {}
        url = self.absolute_url(snapshot.base_url)

        if self.method is HTTPMethod.GET:
            return TransportRequest(
                method=self.method.value,
                url=url_with_string(url, self.params),
                headers=headers,
                timeout=snapshot.timeout,
            )

        fields: Dict[str, str] = {}
        upload: Optional[UploadFile] = None
        for key, value in (self.params or {}).items():
            if value is None:
                continue
            if key == UPLOAD_PARAM and isinstance(value, Path):
                upload = UploadFile(path=value, field_name=key)
                continue
            fields[key] = query_value(value)
        return TransportRequest(
            method=self.method.value,
            url=url_with_string(url),
            headers=headers,
            data=fields or None,
            upload=upload,
            timeout=snapshot.timeout,
        )

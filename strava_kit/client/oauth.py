"""OAuth token exchange, refresh and deauthorization.

Only the HTTP side of OAuth lives here; presenting the authorization page
and catching the redirect is left to the host application.
"""

from __future__ import annotations

import logging
import urllib.parse
from enum import Enum
from typing import Any, Dict, Optional

from ..config import STRAVA_OAUTH_AUTHORIZE_URL
from ..errors import InvalidResponseError, MissingCredentialsError, NoAccessTokenError
from ..utils import mask_token
from .envelope import HTTPMethod, RequestEnvelope
from .handle import Completion, RequestHandle
from .requestor import Requestor

LOGGER = logging.getLogger(__name__)

DEFAULT_SCOPE = "read,activity:read_all"


class OAuthResourcePath(str, Enum):
    TOKEN_EXCHANGE = "/oauth/token"
    DEAUTHORIZATION = "/oauth/deauthorize"


def authorization_url(
    client_id: str,
    redirect_uri: str,
    scope: str = DEFAULT_SCOPE,
    state: Optional[str] = None,
    approval_prompt: str = "auto",
) -> str:
    """Return the Strava page the athlete visits to grant access."""

    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": redirect_uri,
        "scope": scope,
        "approval_prompt": approval_prompt,
    }
    if state:
        params["state"] = state
    return STRAVA_OAUTH_AUTHORIZE_URL + "?" + urllib.parse.urlencode(params)


def _token_payload(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict) or not isinstance(data.get("access_token"), str):
        raise InvalidResponseError("Token response lacks access_token")
    return data


class OAuthAPI:
    def __init__(self, requestor: Requestor) -> None:
        self._requestor = requestor

    def _client_params(self) -> Optional[Dict[str, Any]]:
        config = self._requestor.config
        if not config.client_id or not config.client_secret:
            return None
        return {"client_id": config.client_id, "client_secret": config.client_secret}

    def _missing_client(
        self, path: OAuthResourcePath, callback: Optional[Completion]
    ) -> RequestHandle:
        return self._requestor.failed(
            f"POST {path.value}",
            MissingCredentialsError(
                "Client credentials not configured (client_id / client_secret missing)"
            ),
            callback,
        )

    def exchange_token(
        self, code: str, callback: Optional[Completion] = None
    ) -> RequestHandle:
        """Trade an authorization ``code`` for tokens and configure the client.

        Resolves to the raw token payload (access/refresh tokens, expiry and
        the athlete summary).
        """

        params = self._client_params()
        if params is None:
            return self._missing_client(OAuthResourcePath.TOKEN_EXCHANGE, callback)
        params.update({"code": code, "grant_type": "authorization_code"})

        def transform(data: Any) -> Dict[str, Any]:
            payload = _token_payload(data)
            athlete = payload.get("athlete")
            self._requestor.config.configure(
                payload["access_token"],
                athlete if isinstance(athlete, dict) else None,
                self._requestor.config.alternate_transport,
            )
            return payload

        envelope = RequestEnvelope(
            HTTPMethod.POST, OAuthResourcePath.TOKEN_EXCHANGE.value, False, params=params
        )
        return self._requestor.request(envelope, callback, transform)

    def refresh_access_token(
        self, refresh_token: str, callback: Optional[Completion] = None
    ) -> RequestHandle:
        """Exchange a refresh token for a new access token (and possibly refresh token)."""

        params = self._client_params()
        if params is None:
            return self._missing_client(OAuthResourcePath.TOKEN_EXCHANGE, callback)
        params.update({"refresh_token": refresh_token, "grant_type": "refresh_token"})
        LOGGER.info("Refreshing Strava token refresh_token=%s", mask_token(refresh_token))

        def transform(data: Any) -> Dict[str, Any]:
            payload = _token_payload(data)
            self._requestor.config.update_access_token(payload["access_token"])
            return payload

        envelope = RequestEnvelope(
            HTTPMethod.POST, OAuthResourcePath.TOKEN_EXCHANGE.value, False, params=params
        )
        return self._requestor.request(envelope, callback, transform)

    def deauthorize(self, callback: Optional[Completion] = None) -> RequestHandle:
        """Revoke the held access token and clear the configuration."""

        token = self._requestor.config.access_token
        if not token:
            return self._requestor.failed(
                f"POST {OAuthResourcePath.DEAUTHORIZATION.value}",
                NoAccessTokenError("No access token to deauthorize"),
                callback,
            )

        def transform(data: Any) -> Any:
            self._requestor.config.clear()
            return data

        envelope = RequestEnvelope(
            HTTPMethod.POST,
            OAuthResourcePath.DEAUTHORIZATION.value,
            True,
            params={"access_token": token},
        )
        return self._requestor.request(envelope, callback, transform)

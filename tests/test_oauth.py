from urllib.parse import parse_qs, urlsplit

from strava_kit.client.oauth import authorization_url
from strava_kit.errors import (
    InvalidResponseError,
    MissingCredentialsError,
    NoAccessTokenError,
    StravaErrorCode,
    StravaPermissionError,
)

from conftest import make_athlete, make_response


def test_authorization_url_contains_client_and_scope():
    url = authorization_url("cid", "http://localhost:5000/callback", state="xyz")
    parts = urlsplit(url)
    assert parts.netloc == "www.strava.com"
    assert parts.path == "/oauth/authorize"
    query = parse_qs(parts.query)
    assert query["client_id"] == ["cid"]
    assert query["response_type"] == ["code"]
    assert query["scope"] == ["read,activity:read_all"]
    assert query["state"] == ["xyz"]


def test_exchange_token_configures_client(strava, transport):
    payload = {
        "token_type": "Bearer",
        "access_token": "fresh-access",
        "refresh_token": "fresh-refresh",
        "expires_at": 1568775134,
        "athlete": make_athlete(),
    }
    transport.responses.append(make_response(data=payload))
    result = strava.oauth.exchange_token("auth-code").result(timeout=1)
    assert result["refresh_token"] == "fresh-refresh"
    assert strava.config.access_token == "fresh-access"
    assert strava.current_athlete.athlete_id == 227615
    assert strava.is_authorized
    sent = transport.requests[0]
    assert sent.url == "https://www.strava.com/oauth/token"
    assert sent.data == {
        "client_id": "cid",
        "client_secret": "csec",
        "code": "auth-code",
        "grant_type": "authorization_code",
    }
    assert "Authorization" not in sent.headers


def test_exchange_token_keeps_installed_transport(strava, transport):
    transport.responses.append(make_response(data={"access_token": "a"}))
    strava.oauth.exchange_token("code").result(timeout=1)
    assert strava.config.transport is transport
    assert not strava.is_authorized


def test_exchange_token_without_access_token_is_invalid(strava, transport):
    transport.responses.append(make_response(data={"message": "ok?"}))
    error = strava.oauth.exchange_token("code").error(timeout=1)
    assert isinstance(error, InvalidResponseError)
    assert strava.config.access_token is None


def test_exchange_token_rejected_code(strava, transport):
    transport.responses.append(
        make_response(status=400, data={"message": "Bad Request", "errors": [{"resource": "AuthorizationCode", "field": "code", "code": "invalid"}]})
    )
    error = strava.oauth.exchange_token("bad").error(timeout=1)
    assert error.code is StravaErrorCode.REMOTE_ERROR
    assert "AuthorizationCode/code:invalid" in error.reason


def test_missing_client_credentials(strava, transport):
    strava.config.client_secret = ""
    error = strava.oauth.exchange_token("code").error()
    assert isinstance(error, MissingCredentialsError)
    assert transport.calls == 0


def test_refresh_updates_token_and_keeps_athlete(authed, transport):
    transport.responses.append(make_response(data={"access_token": "rotated", "refresh_token": "r2"}))
    authed.oauth.refresh_access_token("r1").result(timeout=1)
    assert authed.config.access_token == "rotated"
    assert authed.current_athlete is not None
    assert transport.requests[0].data["grant_type"] == "refresh_token"


def test_deauthorize_without_token(strava, transport):
    error = strava.oauth.deauthorize().error()
    assert isinstance(error, NoAccessTokenError)
    assert error.code is StravaErrorCode.NO_ACCESS_TOKEN
    assert transport.calls == 0


def test_deauthorize_clears_configuration(authed, transport):
    transport.responses.append(make_response(data={"access_token": "token-abc123"}))
    authed.oauth.deauthorize().result(timeout=1)
    assert not authed.is_authorized
    assert authed.config.access_token is None
    sent = transport.requests[0]
    assert sent.url == "https://www.strava.com/oauth/deauthorize"
    assert sent.headers["Authorization"] == "Bearer token-abc123"


def test_deauthorize_failure_keeps_token(authed, transport):
    transport.responses.append(make_response(status=401, data={"message": "Authorization Error"}))
    error = authed.oauth.deauthorize().error(timeout=1)
    assert isinstance(error, StravaPermissionError)
    assert authed.config.access_token == "token-abc123"

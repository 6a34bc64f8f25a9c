from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlsplit

import pytest

from strava_kit.errors import InvalidURLError, StravaErrorCode
from strava_kit.utils import mask_params, mask_token, parse_date, replace_id, url_with_string


def test_replace_id_substitutes_placeholder():
    assert replace_id("/api/v3/uploads/:id", 42) == "/api/v3/uploads/42"
    assert replace_id("/api/v3/athletes/:id/stats", "abc") == "/api/v3/athletes/abc/stats"


def test_replace_id_leaves_other_id_shaped_text():
    assert replace_id("/api/v3/:identity/:id", 7) == "/api/v3/:identity/7"
    assert replace_id("/api/v3/things:id", 7) == "/api/v3/things:id"
    assert replace_id("/api/v3/athlete", 7) == "/api/v3/athlete"


def test_query_parameters_are_coerced():
    url = url_with_string("https://www.strava.com/api/v3/x", {"a": 1, "b": "x"})
    parts = urlsplit(url)
    assert parts.path == "/api/v3/x"
    assert parse_qs(parts.query) == {"a": ["1"], "b": ["x"]}


def test_query_parameters_booleans_lists_and_none():
    url = url_with_string(
        "https://www.strava.com/api/v3/segments/explore?x=1",
        {"bounds": [37.8, -122.5, 37.9, -122.4], "flag": True, "skip": None},
    )
    query = parse_qs(urlsplit(url).query)
    assert query == {
        "x": ["1"],
        "bounds": ["37.8,-122.5,37.9,-122.4"],
        "flag": ["true"],
    }


@pytest.mark.parametrize(
    "value",
    [None, "", "ftp://www.strava.com/api", "www.strava.com/api", "mailto:a@b.c", "https://"],
)
def test_non_http_urls_are_rejected(value):
    with pytest.raises(InvalidURLError) as excinfo:
        url_with_string(value)
    assert excinfo.value.code is StravaErrorCode.INVALID_URL


def test_url_without_params_is_unchanged():
    assert url_with_string("http://localhost:8080/api") == "http://localhost:8080/api"


def test_parse_date_variants():
    assert parse_date("2016-08-18T19:34:12Z") == datetime(2016, 8, 18, 19, 34, 12, tzinfo=timezone.utc)
    offset = parse_date("2016-08-18T12:34:12-07:00")
    assert offset.utcoffset() == timedelta(hours=-7)
    assert parse_date("2016-08-18T19:34:12").tzinfo is timezone.utc
    assert parse_date("not a date") is None
    assert parse_date(None) is None


def test_masking_hides_secrets():
    assert mask_token("abcdef123456") == "****3456"
    assert mask_token(None) == ""
    masked = mask_params({"client_secret": "supersecret", "page": 2})
    assert masked == {"client_secret": "****cret", "page": 2}

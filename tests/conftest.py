"""Global pytest fixtures & helpers.

Adds project root to path and provides a fake transport plus sample payloads
so request tests never touch the network.
"""
from __future__ import annotations

import json
import os
import sys
import threading
from typing import List

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from strava_kit.client.configuration import StravaConfig
from strava_kit.client.transport import TransportRequest, TransportResponse
from strava_kit.strava import Strava


# --- Factory helpers -------------------------------------------------
def make_response(status=200, data=None, headers=None, body=None):
    if body is None and data is not None:
        body = json.dumps(data).encode()
    return TransportResponse(status=status, headers=headers or {}, body=body)


def make_athlete(**overrides):
    data = {
        "id": 227615,
        "resource_state": 3,
        "firstname": "John",
        "lastname": "Applestrava",
        "city": "San Francisco",
        "premium": True,
        "created_at": "2008-01-01T17:44:00Z",
    }
    data.update(overrides)
    return data


def make_segment(**overrides):
    data = {
        "id": 229781,
        "resource_state": 3,
        "name": "Hawk Hill",
        "distance": 2684.82,
        "start_latlng": [37.8331119, -122.4834356],
        "end_latlng": [37.8280722, -122.4981393],
        "climb_category": 1,
        "starred": False,
        "activity_type": "Ride",
        "average_grade": 5.7,
        "city": "San Francisco",
        "created_at": "2009-09-21T20:29:41Z",
        "map": {"id": "s229781", "resource_state": 3, "polyline": "}g|eFnpqjVl@En@Md@"},
        "athlete_segment_stats": {"effort_count": 3, "pr_elapsed_time": 553},
    }
    data.update(overrides)
    return data


def make_activity(**overrides):
    data = {
        "id": 321934,
        "resource_state": 2,
        "name": "Evening Ride",
        "distance": 4475.4,
        "moving_time": 1303,
        "elapsed_time": 1333,
        "total_elevation_gain": 154.5,
        "type": "Ride",
        "start_date": "2012-12-13T03:43:19Z",
        "start_date_local": "2012-12-12T19:43:19Z",
        "athlete": {"id": 227615, "resource_state": 1},
        "kudos_count": 1,
    }
    data.update(overrides)
    return data


class FakeTransport:
    """Records every request and answers from a queue of responses."""

    def __init__(self, *responses: TransportResponse) -> None:
        self.responses: List[TransportResponse] = list(responses)
        self.requests: List[TransportRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def send(self, request: TransportRequest) -> TransportResponse:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        return self.responses.pop(0)


class BlockingTransport(FakeTransport):
    """Holds each request until ``release`` is set."""

    def __init__(self, *responses: TransportResponse) -> None:
        super().__init__(*responses)
        self.started = threading.Event()
        self.release = threading.Event()

    def send(self, request: TransportRequest) -> TransportResponse:
        self.started.set()
        self.release.wait(5)
        return super().send(request)


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def config(transport):
    return StravaConfig(
        transport=transport,
        base_url="https://www.strava.com",
        debug=False,
        client_id="cid",
        client_secret="csec",
    )


@pytest.fixture
def strava(config):
    client = Strava(config, max_workers=2)
    yield client
    client.close()


@pytest.fixture
def authed(strava, transport):
    strava.configure("token-abc123", make_athlete(), transport)
    return strava

from pathlib import Path

import pytest

from strava_kit.client.uploads import data_type_for, handle_upload_response
from strava_kit.errors import (
    InvalidResponseError,
    MissingCredentialsError,
    StravaErrorCode,
    StravaResourceNotFoundError,
    StravaUndefinedError,
)
from strava_kit.models import UploadStatus

from conftest import make_response


@pytest.fixture
def gpx_file(tmp_path):
    path = tmp_path / "morning_ride.gpx"
    path.write_text("<gpx></gpx>")
    return path


def test_embedded_error_is_logical_failure(authed, transport, gpx_file):
    transport.responses.append(make_response(status=200, data={"status": "error", "error": "failed"}))
    error = authed.uploads.upload_activity(gpx_file).error(timeout=1)
    assert isinstance(error, StravaUndefinedError)
    assert error.code is StravaErrorCode.UNDEFINED_ERROR
    assert error.reason == "failed"


def test_ready_status_without_error_is_success(authed, transport, gpx_file):
    transport.responses.append(make_response(status=201, data={"status": "ready to upload"}))
    handle = authed.uploads.upload_activity(gpx_file)
    status = handle.result(timeout=1)
    assert isinstance(status, UploadStatus)
    assert status.status == "ready to upload"
    assert handle.error() is None


def test_null_error_field_is_success():
    status = handle_upload_response({"id": 1, "status": "Your activity is still being processed.", "error": None})
    assert status.upload_id == 1


def test_non_mapping_upload_response_is_invalid():
    with pytest.raises(InvalidResponseError):
        handle_upload_response([{"status": "ok"}])
    with pytest.raises(InvalidResponseError):
        handle_upload_response({"id": 3})


def test_upload_sends_multipart_fields(authed, transport, gpx_file):
    transport.responses.append(make_response(data={"id": 9, "status": "Your activity is still being processed."}))
    authed.uploads.upload_activity(
        gpx_file,
        activity_type="ride",
        name="Morning Ride",
        description=None,
        commute=True,
    ).result(timeout=1)
    sent = transport.requests[0]
    assert sent.method == "POST"
    assert sent.url == "https://www.strava.com/api/v3/uploads"
    assert sent.upload.path == Path(gpx_file)
    assert sent.upload.field_name == "file"
    assert sent.upload.filename == "morning_ride.gpx"
    assert sent.data == {
        "data_type": "gpx",
        "activity_type": "ride",
        "name": "Morning Ride",
        "commute": "true",
    }
    assert sent.headers["Authorization"] == "Bearer token-abc123"


def test_upload_requires_token(strava, transport, gpx_file):
    error = strava.uploads.upload_activity(gpx_file).error()
    assert isinstance(error, MissingCredentialsError)
    assert transport.calls == 0


def test_upload_missing_file_fails_fast(authed, transport, tmp_path):
    error = authed.uploads.upload_activity(tmp_path / "nope.fit").error()
    assert isinstance(error, StravaUndefinedError)
    assert "not found" in error.reason
    assert transport.calls == 0


def test_check_upload_substitutes_id(authed, transport):
    transport.responses.append(make_response(data={"id": 42, "status": "Your activity is ready.", "activity_id": 7}))
    status = authed.uploads.check_upload(42).result(timeout=1)
    assert transport.requests[0].url == "https://www.strava.com/api/v3/uploads/42"
    assert transport.requests[0].method == "GET"
    assert status.is_ready


def test_check_upload_not_found(authed, transport):
    transport.responses.append(make_response(status=404, data={"message": "Record Not Found"}))
    error = authed.uploads.check_upload(1).error(timeout=1)
    assert isinstance(error, StravaResourceNotFoundError)


@pytest.mark.parametrize(
    "name, expected",
    [("ride.fit", "fit"), ("ride.FIT.gz", "fit.gz"), ("run.tcx", "tcx"), ("walk.gpx.gz", "gpx.gz"), ("noext", "")],
)
def test_data_type_from_extension(name, expected):
    assert data_type_for(Path(name)) == expected

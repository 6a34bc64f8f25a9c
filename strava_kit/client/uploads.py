"""Activity file uploads and upload status checks.

Strava answers an upload with a status document even when processing
failed; a string ``error`` in that document is a failed upload although the
HTTP call succeeded.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..errors import InvalidResponseError, StravaUndefinedError
from ..models import UploadStatus
from .envelope import UPLOAD_PARAM, HTTPMethod, RequestEnvelope
from .handle import Completion, RequestHandle
from .requestor import Requestor

LOGGER = logging.getLogger(__name__)


class UploadResourcePath(str, Enum):
    UPLOAD = "/api/v3/uploads"
    CHECK_UPLOAD = "/api/v3/uploads/:id"


def handle_upload_response(details: Any) -> UploadStatus:
    """Return the upload status, or raise for embedded or malformed errors."""

    if not isinstance(details, dict):
        raise InvalidResponseError("Invalid Response")
    LOGGER.info("Upload status: %s", details.get("status"))
    error = details.get("error")
    if isinstance(error, str):
        raise StravaUndefinedError(error)
    status = UploadStatus.from_dict(details)
    if status is None:
        raise InvalidResponseError("Invalid Response")
    return status


def data_type_for(path: Path) -> str:
    """Strava data_type from the file name: ``ride.fit.gz`` -> ``fit.gz``."""

    suffixes = [suffix.lstrip(".").lower() for suffix in path.suffixes]
    if len(suffixes) >= 2 and suffixes[-1] == "gz":
        return ".".join(suffixes[-2:])
    return suffixes[-1] if suffixes else ""


class UploadsAPI:
    def __init__(self, requestor: Requestor) -> None:
        self._requestor = requestor

    def upload_activity(
        self,
        activity_file: Union[str, Path],
        activity_type: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        private: Optional[bool] = None,
        trainer: Optional[bool] = None,
        commute: Optional[bool] = None,
        external_id: Optional[str] = None,
        callback: Optional[Completion] = None,
    ) -> RequestHandle:
        """Upload a FIT/TCX/GPX file (optionally gzipped) as multipart form data."""

        path = Path(activity_file)
        if not path.is_file():
            return self._requestor.failed(
                f"POST {UploadResourcePath.UPLOAD.value}",
                StravaUndefinedError(f"Activity file not found: {path}"),
                callback,
            )
        params: Dict[str, Any] = {
            UPLOAD_PARAM: path,
            "data_type": data_type_for(path),
            "activity_type": activity_type,
            "name": name,
            "description": description,
            "private": private,
            "trainer": trainer,
            "commute": commute,
            "external_id": external_id,
        }
        envelope = RequestEnvelope(
            HTTPMethod.POST, UploadResourcePath.UPLOAD.value, True, params=params
        )
        return self._requestor.request(envelope, callback, handle_upload_response)

    def check_upload(
        self, upload_id: int, callback: Optional[Completion] = None
    ) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET,
            UploadResourcePath.CHECK_UPLOAD.value,
            True,
            identifier=upload_id,
        )
        return self._requestor.request(envelope, callback, handle_upload_response)

"""Activity endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from ..models import Activity
from .envelope import HTTPMethod, RequestEnvelope
from .handle import Completion, RequestHandle
from .requestor import Requestor, expect_record, expect_records


class ActivityResourcePath(str, Enum):
    ACTIVITIES = "/api/v3/athlete/activities"
    ACTIVITY = "/api/v3/activities/:id"
    FOLLOWING = "/api/v3/activities/following"


def page_params(page: Optional[int], per_page: Optional[int]) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if page is not None:
        params["page"] = page
    if per_page is not None:
        params["per_page"] = per_page
    return params


class ActivitiesAPI:
    def __init__(self, requestor: Requestor) -> None:
        self._requestor = requestor

    def get_activities(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        callback: Optional[Completion] = None,
    ) -> RequestHandle:
        """List the authenticated athlete's activities, newest first."""

        envelope = RequestEnvelope(
            HTTPMethod.GET,
            ActivityResourcePath.ACTIVITIES.value,
            True,
            params=page_params(page, per_page),
        )
        return self._requestor.request(envelope, callback, expect_records(Activity))

    def get_following_activities(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        callback: Optional[Completion] = None,
    ) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET,
            ActivityResourcePath.FOLLOWING.value,
            True,
            params=page_params(page, per_page),
        )
        return self._requestor.request(envelope, callback, expect_records(Activity))

    def get_activity(
        self, activity_id: int, callback: Optional[Completion] = None
    ) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET,
            ActivityResourcePath.ACTIVITY.value,
            True,
            identifier=activity_id,
        )
        return self._requestor.request(envelope, callback, expect_record(Activity))

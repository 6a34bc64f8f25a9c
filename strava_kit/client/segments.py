"""Segment endpoints, including explore by bounding box."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..errors import InvalidResponseError, UnsupportedRequestError
from ..models import Segment
from .activities import page_params
from .envelope import HTTPMethod, RequestEnvelope
from .handle import Completion, RequestHandle
from .requestor import Requestor, expect_record, expect_records


class SegmentResourcePath(str, Enum):
    SEGMENT = "/api/v3/segments/:id"
    STARRED = "/api/v3/segments/starred"
    EXPLORE = "/api/v3/segments/explore"


EXPLORE_ACTIVITY_TYPES = {"running", "riding"}


def _explored_segments(data: Any) -> List[Segment]:
    segments = Segment.segments(data)
    if segments is None:
        raise InvalidResponseError("Explore response has no segments list")
    return segments


class SegmentsAPI:
    def __init__(self, requestor: Requestor) -> None:
        self._requestor = requestor

    def get_segment(
        self, segment_id: int, callback: Optional[Completion] = None
    ) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET,
            SegmentResourcePath.SEGMENT.value,
            True,
            identifier=segment_id,
        )
        return self._requestor.request(envelope, callback, expect_record(Segment))

    def get_starred_segments(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        callback: Optional[Completion] = None,
    ) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET,
            SegmentResourcePath.STARRED.value,
            True,
            params=page_params(page, per_page),
        )
        return self._requestor.request(envelope, callback, expect_records(Segment))

    def explore_segments(
        self,
        bounds: Sequence[float],
        activity_type: Optional[str] = None,
        min_cat: Optional[int] = None,
        max_cat: Optional[int] = None,
        callback: Optional[Completion] = None,
    ) -> RequestHandle:
        """Top segments inside ``bounds`` (sw lat, sw lng, ne lat, ne lng)."""

        context = f"GET {SegmentResourcePath.EXPLORE.value}"
        if len(bounds) != 4:
            return self._requestor.failed(
                context,
                UnsupportedRequestError("bounds must hold sw lat, sw lng, ne lat, ne lng"),
                callback,
            )
        if activity_type is not None and activity_type not in EXPLORE_ACTIVITY_TYPES:
            return self._requestor.failed(
                context,
                UnsupportedRequestError(f"Unsupported activity_type {activity_type!r}"),
                callback,
            )
        params: Dict[str, Any] = {
            "bounds": list(bounds),
            "activity_type": activity_type,
            "min_cat": min_cat,
            "max_cat": max_cat,
        }
        envelope = RequestEnvelope(
            HTTPMethod.GET, SegmentResourcePath.EXPLORE.value, True, params=params
        )
        return self._requestor.request(envelope, callback, _explored_segments)

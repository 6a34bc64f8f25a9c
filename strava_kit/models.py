"""Typed records decoded from Strava API payloads.

Each record lists its wire fields in ``FIELDS``; required fields come first
and have no default. See :mod:`strava_kit.decoding` for the presence rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Type, TypeVar

from .decoding import (
    Field,
    LatLng,
    as_bool,
    as_datetime,
    as_dict,
    as_float,
    as_int,
    as_latlng,
    as_record,
    as_record_list,
    as_str,
    decode_record,
    decode_records,
    optional,
)

R = TypeVar("R", bound="Record")


class Record:
    """Mixin giving dataclass records their decode entry points."""

    FIELDS: ClassVar[Sequence[Field]] = ()

    @classmethod
    def from_dict(cls: Type[R], data: Any) -> Optional[R]:
        return decode_record(cls, data)

    @classmethod
    def from_list(cls: Type[R], items: Any) -> Optional[List[R]]:
        if not isinstance(items, list):
            return None
        return decode_records(cls, items)


@dataclass
class Athlete(Record):
    athlete_id: int
    resource_state: int
    first_name: str
    last_name: str
    profile_medium: Optional[str] = None
    profile: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    sex: Optional[str] = None
    premium: Optional[bool] = None
    summit: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    follower_count: Optional[int] = None
    friend_count: Optional[int] = None
    measurement_preference: Optional[str] = None
    email: Optional[str] = None
    ftp: Optional[int] = None
    weight: Optional[float] = None

    FIELDS: ClassVar[Sequence[Field]] = (
        Field("id", "athlete_id", as_int),
        Field("resource_state", "resource_state", as_int),
        Field("firstname", "first_name", as_str),
        Field("lastname", "last_name", as_str),
        optional("profile_medium", "profile_medium", as_str),
        optional("profile", "profile", as_str),
        optional("city", "city", as_str),
        optional("state", "state", as_str),
        optional("country", "country", as_str),
        optional("sex", "sex", as_str),
        optional("premium", "premium", as_bool),
        optional("summit", "summit", as_bool),
        optional("created_at", "created_at", as_datetime),
        optional("updated_at", "updated_at", as_datetime),
        optional("follower_count", "follower_count", as_int),
        optional("friend_count", "friend_count", as_int),
        optional("measurement_preference", "measurement_preference", as_str),
        optional("email", "email", as_str),
        optional("ftp", "ftp", as_int),
        optional("weight", "weight", as_float),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Map(Record):
    map_id: str
    resource_state: Optional[int] = None
    polyline: Optional[str] = None
    summary_polyline: Optional[str] = None

    FIELDS: ClassVar[Sequence[Field]] = (
        Field("id", "map_id", as_str),
        optional("resource_state", "resource_state", as_int),
        optional("polyline", "polyline", as_str),
        optional("summary_polyline", "summary_polyline", as_str),
    )


@dataclass
class SegmentStats(Record):
    effort_count: int
    pr_elapsed_time: Optional[int] = None
    pr_date: Optional[datetime] = None

    FIELDS: ClassVar[Sequence[Field]] = (
        Field("effort_count", "effort_count", as_int),
        optional("pr_elapsed_time", "pr_elapsed_time", as_int),
        optional("pr_date", "pr_date", as_datetime),
    )


@dataclass
class Segment(Record):
    segment_id: int
    resource_state: int
    name: str
    distance: float
    start_latlng: LatLng
    end_latlng: LatLng
    climb_category: int
    starred: bool
    points: Optional[str] = None
    climb_category_description: Optional[str] = None
    elevation_high: Optional[float] = None
    elevation_low: Optional[float] = None
    elevation_difference: Optional[float] = None
    maximum_grade: Optional[float] = None
    average_grade: Optional[float] = None
    activity_type: Optional[str] = None
    starred_date: Optional[datetime] = None
    is_private: Optional[bool] = None
    hazardous: Optional[bool] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    total_elevation_gain: Optional[float] = None
    map: Optional[Map] = None
    effort_count: Optional[int] = None
    athlete_count: Optional[int] = None
    star_count: Optional[int] = None
    athlete_segment_stats: Optional[SegmentStats] = None

    FIELDS: ClassVar[Sequence[Field]] = (
        Field("id", "segment_id", as_int),
        Field("resource_state", "resource_state", as_int),
        Field("name", "name", as_str),
        Field("distance", "distance", as_float),
        Field("start_latlng", "start_latlng", as_latlng),
        Field("end_latlng", "end_latlng", as_latlng),
        Field("climb_category", "climb_category", as_int),
        Field("starred", "starred", as_bool),
        optional("points", "points", as_str),
        optional("climb_category_desc", "climb_category_description", as_str),
        optional("elevation_high", "elevation_high", as_float),
        optional("elevation_low", "elevation_low", as_float),
        optional("elev_difference", "elevation_difference", as_float),
        optional("maximum_grade", "maximum_grade", as_float),
        optional("average_grade", "average_grade", as_float),
        optional("activity_type", "activity_type", as_str),
        optional("starred_date", "starred_date", as_datetime),
        optional("private", "is_private", as_bool),
        optional("hazardous", "hazardous", as_bool),
        optional("city", "city", as_str),
        optional("state", "state", as_str),
        optional("country", "country", as_str),
        optional("created_at", "created_at", as_datetime),
        optional("updated_at", "updated_at", as_datetime),
        optional("total_elevation_gain", "total_elevation_gain", as_float),
        optional("map", "map", as_record(Map)),
        optional("effort_count", "effort_count", as_int),
        optional("athlete_count", "athlete_count", as_int),
        optional("star_count", "star_count", as_int),
        optional("athlete_segment_stats", "athlete_segment_stats", as_record(SegmentStats)),
    )

    @classmethod
    def segments(cls, payload: Any) -> Optional[List["Segment"]]:
        """Decode ``{"segments": [...]}`` (explore) or a bare list."""

        if isinstance(payload, dict):
            payload = payload.get("segments")
        return cls.from_list(payload)


@dataclass
class Activity(Record):
    activity_id: int
    resource_state: int
    name: str
    distance: float
    moving_time: int
    elapsed_time: int
    total_elevation_gain: float
    activity_type: str
    start_date: datetime
    start_date_local: Optional[datetime] = None
    timezone: Optional[str] = None
    start_latlng: Optional[LatLng] = None
    end_latlng: Optional[LatLng] = None
    achievement_count: Optional[int] = None
    kudos_count: Optional[int] = None
    comment_count: Optional[int] = None
    athlete_count: Optional[int] = None
    photo_count: Optional[int] = None
    map: Optional[Map] = None
    trainer: Optional[bool] = None
    commute: Optional[bool] = None
    manual: Optional[bool] = None
    is_private: Optional[bool] = None
    average_speed: Optional[float] = None
    max_speed: Optional[float] = None
    elevation_high: Optional[float] = None
    elevation_low: Optional[float] = None
    description: Optional[str] = None
    calories: Optional[float] = None
    gear_id: Optional[str] = None
    external_id: Optional[str] = None
    athlete: Optional[Dict[str, Any]] = field(default=None, repr=False)

    FIELDS: ClassVar[Sequence[Field]] = (
        Field("id", "activity_id", as_int),
        Field("resource_state", "resource_state", as_int),
        Field("name", "name", as_str),
        Field("distance", "distance", as_float),
        Field("moving_time", "moving_time", as_int),
        Field("elapsed_time", "elapsed_time", as_int),
        Field("total_elevation_gain", "total_elevation_gain", as_float),
        Field("type", "activity_type", as_str),
        Field("start_date", "start_date", as_datetime),
        optional("start_date_local", "start_date_local", as_datetime),
        optional("timezone", "timezone", as_str),
        optional("start_latlng", "start_latlng", as_latlng),
        optional("end_latlng", "end_latlng", as_latlng),
        optional("achievement_count", "achievement_count", as_int),
        optional("kudos_count", "kudos_count", as_int),
        optional("comment_count", "comment_count", as_int),
        optional("athlete_count", "athlete_count", as_int),
        optional("photo_count", "photo_count", as_int),
        optional("map", "map", as_record(Map)),
        optional("trainer", "trainer", as_bool),
        optional("commute", "commute", as_bool),
        optional("manual", "manual", as_bool),
        optional("private", "is_private", as_bool),
        optional("average_speed", "average_speed", as_float),
        optional("max_speed", "max_speed", as_float),
        optional("elev_high", "elevation_high", as_float),
        optional("elev_low", "elevation_low", as_float),
        optional("description", "description", as_str),
        optional("calories", "calories", as_float),
        optional("gear_id", "gear_id", as_str),
        optional("external_id", "external_id", as_str),
        optional("athlete", "athlete", as_dict),
    )


@dataclass
class Route(Record):
    route_id: int
    name: str
    distance: float
    elevation_gain: float
    route_type: int
    sub_type: int
    is_private: bool
    starred: bool
    timestamp: int
    description: Optional[str] = None
    athlete: Optional[Dict[str, Any]] = field(default=None, repr=False)
    map: Optional[Map] = None
    segments: Optional[List[Segment]] = None

    FIELDS: ClassVar[Sequence[Field]] = (
        Field("id", "route_id", as_int),
        Field("name", "name", as_str),
        Field("distance", "distance", as_float),
        Field("elevation_gain", "elevation_gain", as_float),
        Field("type", "route_type", as_int),
        Field("sub_type", "sub_type", as_int),
        Field("private", "is_private", as_bool),
        Field("starred", "starred", as_bool),
        Field("timestamp", "timestamp", as_int),
        optional("description", "description", as_str),
        optional("athlete", "athlete", as_dict),
        optional("map", "map", as_record(Map)),
        optional("segments", "segments", as_record_list(Segment)),
    )


@dataclass
class UploadStatus(Record):
    status: str
    upload_id: Optional[int] = None
    id_str: Optional[str] = None
    external_id: Optional[str] = None
    error: Optional[str] = None
    activity_id: Optional[int] = None

    FIELDS: ClassVar[Sequence[Field]] = (
        Field("status", "status", as_str),
        optional("id", "upload_id", as_int),
        optional("id_str", "id_str", as_str),
        optional("external_id", "external_id", as_str),
        optional("error", "error", as_str),
        optional("activity_id", "activity_id", as_int),
    )

    @property
    def is_ready(self) -> bool:
        return self.activity_id is not None


__all__ = [
    "Activity",
    "Athlete",
    "LatLng",
    "Map",
    "Record",
    "Route",
    "Segment",
    "SegmentStats",
    "UploadStatus",
]

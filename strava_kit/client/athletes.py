"""Athlete endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from ..models import Athlete
from .envelope import HTTPMethod, RequestEnvelope
from .handle import Completion, RequestHandle
from .requestor import Requestor, expect_mapping, expect_record


class AthleteResourcePath(str, Enum):
    ATHLETE = "/api/v3/athlete"
    ATHLETES = "/api/v3/athletes/:id"
    STATS = "/api/v3/athletes/:id/stats"


class AthletesAPI:
    def __init__(self, requestor: Requestor) -> None:
        self._requestor = requestor

    def get_athlete(self, callback: Optional[Completion] = None) -> RequestHandle:
        """Fetch the authenticated athlete and store it on the configuration."""

        decode = expect_record(Athlete)

        def transform(data: Any) -> Athlete:
            athlete = decode(data)
            self._requestor.config.update_athlete(athlete)
            return athlete

        envelope = RequestEnvelope(HTTPMethod.GET, AthleteResourcePath.ATHLETE.value, True)
        return self._requestor.request(envelope, callback, transform)

    def get_athlete_by_id(
        self, athlete_id: int, callback: Optional[Completion] = None
    ) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET,
            AthleteResourcePath.ATHLETES.value,
            True,
            identifier=athlete_id,
        )
        return self._requestor.request(envelope, callback, expect_record(Athlete))

    def get_athlete_stats(
        self, athlete_id: int, callback: Optional[Completion] = None
    ) -> RequestHandle:
        """Totals and recent/ytd/all-time summaries as a raw mapping."""

        envelope = RequestEnvelope(
            HTTPMethod.GET,
            AthleteResourcePath.STATS.value,
            True,
            identifier=athlete_id,
        )
        return self._requestor.request(envelope, callback, expect_mapping)

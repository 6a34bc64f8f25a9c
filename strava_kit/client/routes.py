"""Route endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from ..models import Route
from .envelope import HTTPMethod, RequestEnvelope
from .handle import Completion, RequestHandle
from .requestor import Requestor, expect_record, expect_records


class RouteResourcePath(str, Enum):
    ROUTE = "/api/v3/routes/:id"
    ROUTES = "/api/v3/athletes/:id/routes"


class RoutesAPI:
    def __init__(self, requestor: Requestor) -> None:
        self._requestor = requestor

    def get_route(self, route_id: int, callback: Optional[Completion] = None) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET, RouteResourcePath.ROUTE.value, True, identifier=route_id
        )
        return self._requestor.request(envelope, callback, expect_record(Route))

    def get_routes(
        self, athlete_id: int, callback: Optional[Completion] = None
    ) -> RequestHandle:
        envelope = RequestEnvelope(
            HTTPMethod.GET, RouteResourcePath.ROUTES.value, True, identifier=athlete_id
        )
        return self._requestor.request(envelope, callback, expect_records(Route))

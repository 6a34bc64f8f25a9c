from urllib.parse import parse_qs, urlsplit

from strava_kit.errors import InvalidResponseError, UnsupportedRequestError
from strava_kit.models import Activity, Athlete, Route, Segment

from conftest import make_activity, make_athlete, make_response, make_segment


def _query(request):
    return parse_qs(urlsplit(request.url).query)


def test_get_athlete_refreshes_current_athlete(authed, transport):
    transport.responses.append(make_response(data=make_athlete(firstname="Jane")))
    athlete = authed.athletes.get_athlete().result(timeout=1)
    assert isinstance(athlete, Athlete)
    assert authed.current_athlete.first_name == "Jane"
    assert urlsplit(transport.requests[0].url).path == "/api/v3/athlete"


def test_get_athlete_invalid_payload(authed, transport):
    transport.responses.append(make_response(data={"id": 1}))
    error = authed.athletes.get_athlete().error(timeout=1)
    assert isinstance(error, InvalidResponseError)
    assert authed.current_athlete.first_name == "John"


def test_get_athlete_by_id_and_stats(authed, transport):
    transport.responses.append(make_response(data=make_athlete(id=5)))
    transport.responses.append(make_response(data={"all_ride_totals": {"count": 3}}))
    assert authed.athletes.get_athlete_by_id(5).result(timeout=1).athlete_id == 5
    stats = authed.athletes.get_athlete_stats(5).result(timeout=1)
    assert stats["all_ride_totals"]["count"] == 3
    paths = [urlsplit(r.url).path for r in transport.requests]
    assert paths == ["/api/v3/athletes/5", "/api/v3/athletes/5/stats"]


def test_get_activities_with_paging(authed, transport):
    transport.responses.append(make_response(data=[make_activity(), make_activity(id=2), {"id": 3}]))
    activities = authed.activities.get_activities(page=2, per_page=50).result(timeout=1)
    assert [a.activity_id for a in activities] == [321934, 2]
    assert all(isinstance(a, Activity) for a in activities)
    assert _query(transport.requests[0]) == {"page": ["2"], "per_page": ["50"]}


def test_get_activities_without_paging_sends_no_query(authed, transport):
    transport.responses.append(make_response(data=[]))
    assert authed.activities.get_activities().result(timeout=1) == []
    assert urlsplit(transport.requests[0].url).query == ""


def test_get_activities_object_body_is_invalid(authed, transport):
    transport.responses.append(make_response(data={"message": "nope"}))
    error = authed.activities.get_activities().error(timeout=1)
    assert isinstance(error, InvalidResponseError)


def test_get_activity_and_following(authed, transport):
    transport.responses.append(make_response(data=make_activity(id=77)))
    transport.responses.append(make_response(data=[make_activity()]))
    assert authed.activities.get_activity(77).result(timeout=1).activity_id == 77
    assert len(authed.activities.get_following_activities(page=1).result(timeout=1)) == 1
    paths = [urlsplit(r.url).path for r in transport.requests]
    assert paths == ["/api/v3/activities/77", "/api/v3/activities/following"]


def test_get_segment_and_starred(authed, transport):
    transport.responses.append(make_response(data=make_segment()))
    transport.responses.append(make_response(data=[make_segment(starred=True)]))
    segment = authed.segments.get_segment(229781).result(timeout=1)
    assert isinstance(segment, Segment)
    starred = authed.segments.get_starred_segments().result(timeout=1)
    assert starred[0].starred is True
    paths = [urlsplit(r.url).path for r in transport.requests]
    assert paths == ["/api/v3/segments/229781", "/api/v3/segments/starred"]


def test_explore_segments(authed, transport):
    transport.responses.append(make_response(data={"segments": [make_segment(), make_segment(id=2)]}))
    segments = authed.segments.explore_segments(
        [37.821362, -122.505373, 37.842038, -122.465977], activity_type="riding"
    ).result(timeout=1)
    assert [s.segment_id for s in segments] == [229781, 2]
    query = _query(transport.requests[0])
    assert query == {
        "bounds": ["37.821362,-122.505373,37.842038,-122.465977"],
        "activity_type": ["riding"],
    }


def test_explore_segments_rejects_bad_arguments(authed, transport):
    error = authed.segments.explore_segments([1.0, 2.0]).error()
    assert isinstance(error, UnsupportedRequestError)
    error = authed.segments.explore_segments([1, 2, 3, 4], activity_type="swimming").error()
    assert isinstance(error, UnsupportedRequestError)
    assert transport.calls == 0


def test_routes(authed, transport):
    route = {
        "id": 10,
        "name": "Loop",
        "distance": 1000.0,
        "elevation_gain": 12,
        "type": 2,
        "sub_type": 1,
        "private": True,
        "starred": False,
        "timestamp": 1461784542,
    }
    transport.responses.append(make_response(data=route))
    transport.responses.append(make_response(data=[route, {"id": 11}]))
    assert isinstance(authed.routes.get_route(10).result(timeout=1), Route)
    routes = authed.routes.get_routes(227615).result(timeout=1)
    assert [r.route_id for r in routes] == [10]
    paths = [urlsplit(r.url).path for r in transport.requests]
    assert paths == ["/api/v3/routes/10", "/api/v3/athletes/227615/routes"]

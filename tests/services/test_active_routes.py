import asyncio

import aiohttp
import pytest

from route_projector.domain.schedule import RouteType
from route_projector.services.active_routes import ActiveRoutesClient, ScheduleFetchError

from fakes import FakeResponse, FakeSession

BODY = {
    "success": True,
    "message": "",
    "data": {
        "schedules": [
            {"id": 1, "route_type": "area_route", "center_lat": 41.0, "center_lng": 29.0},
        ]
    },
}


def _client(session):
    return ActiveRoutesClient("https://api.example.test/", app_token="tok", session=session)


def test_fetch_posts_user_and_filters_with_token_header():
    session = FakeSession(FakeResponse(200, BODY))
    schedules = asyncio.run(_client(session).fetch_schedules("42", status="active", employee_id=7))

    assert [s.route_type for s in schedules] == [RouteType.AREA_ROUTE]
    method, url, kw = session.calls[0]
    assert method == "POST"
    assert url == "https://api.example.test/getroutetrackings"
    assert kw["json"] == {"userId": "42", "status": "active", "employeeId": 7}
    assert kw["headers"]["app_token"] == "tok"


def test_optional_filters_are_omitted():
    session = FakeSession(FakeResponse(200, BODY))
    asyncio.run(_client(session).fetch_schedules("42"))
    assert session.calls[0][2]["json"] == {"userId": "42"}


@pytest.mark.parametrize(
    "status, body, kind",
    [
        (401, None, "unauthorized"),
        (403, None, "invalid_app_token"),
        (404, None, "not_found"),
        (422, {"message": "bad date"}, "bad_request"),
        (400, None, "invalid_data"),
        (503, None, "server"),
    ],
)
def test_status_codes_map_to_error_kinds(status, body, kind):
    session = FakeSession(FakeResponse(status, body))
    with pytest.raises(ScheduleFetchError) as err:
        asyncio.run(_client(session).fetch_schedules("42"))
    assert err.value.kind == kind
    assert err.value.status == status


def test_bad_request_carries_server_message():
    session = FakeSession(FakeResponse(422, {"message": "bad date"}))
    with pytest.raises(ScheduleFetchError, match="bad date"):
        asyncio.run(_client(session).fetch_schedules("42"))


def test_transport_failure_is_network_error():
    session = FakeSession(error=aiohttp.ClientConnectionError("connection refused"))
    with pytest.raises(ScheduleFetchError) as err:
        asyncio.run(_client(session).fetch_schedules("42"))
    assert err.value.kind == "network"


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(200, raw="<html>oops</html>"),
        FakeResponse(200, None),
        FakeResponse(200, {"data": {"schedules": [{"route_type": "fixed_route"}]}}),
    ],
)
def test_undecodable_body_is_invalid_data(response):
    with pytest.raises(ScheduleFetchError) as err:
        asyncio.run(_client(FakeSession(response)).fetch_schedules("42"))
    assert err.value.kind == "invalid_data"

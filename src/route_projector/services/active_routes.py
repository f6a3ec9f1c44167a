# services/active_routes.py
from typing import Any, Literal

import aiohttp
from pydantic import ValidationError

from route_projector.app.protocols import ScheduleSource
from route_projector.domain.schedule import Schedule
from route_projector.io.payloads import ActiveRoutesResponse, ErrorPayload

FetchErrorKind = Literal[
    "network",
    "unauthorized",
    "invalid_app_token",
    "not_found",
    "bad_request",
    "server",
    "invalid_data",
]


class ScheduleFetchError(Exception):
    def __init__(self, kind: FetchErrorKind, message: str = "", status: int | None = None):
        super().__init__(message or kind)
        self.kind = kind
        self.status = status


def error_for_status(status: int, body: Any) -> ScheduleFetchError:
    if status == 401:
        return ScheduleFetchError("unauthorized", status=status)
    if status == 403:
        return ScheduleFetchError("invalid_app_token", status=status)
    if status == 404:
        return ScheduleFetchError("not_found", status=status)
    if 400 <= status < 500:
        try:
            msg = ErrorPayload.model_validate(body).message
        except ValidationError:
            msg = ""
        if msg:
            return ScheduleFetchError("bad_request", msg, status=status)
        return ScheduleFetchError("invalid_data", status=status)
    if status >= 500:
        return ScheduleFetchError("server", f"server error: {status}", status=status)
    return ScheduleFetchError("invalid_data", f"unexpected status {status}", status=status)


class ActiveRoutesClient(ScheduleSource):
    """Fetches a user's active schedules from the backend."""

    def __init__(
        self,
        base_url: str,
        *,
        app_token: str = "",
        endpoint: str = "getroutetrackings",
        token_header: str = "app_token",
        timeout_s: float = 60.0,
        session: aiohttp.ClientSession | None = None,
    ):
        self.url = f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        self.headers = {"Accept": "application/json", token_header: app_token}
        self.timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._session = session

    async def fetch_schedules(
        self,
        user_id: str,
        *,
        status: str | None = None,
        employee_id: int | None = None,
    ) -> list[Schedule]:
        body: dict[str, Any] = {"userId": user_id}
        if status is not None:
            body["status"] = status
        if employee_id is not None:
            body["employeeId"] = employee_id

        try:
            if self._session is not None:
                return await self._post(self._session, body)
            async with aiohttp.ClientSession(timeout=self.timeout) as s:
                return await self._post(s, body)
        except aiohttp.ClientError as e:
            raise ScheduleFetchError("network", str(e)) from e

    async def _post(self, session, body: dict[str, Any]) -> list[Schedule]:
        async with session.post(self.url, json=body, headers=self.headers) as r:
            try:
                data = await r.json(content_type=None)
            except ValueError:
                data = None
            if not 200 <= r.status < 300:
                raise error_for_status(r.status, data)
            if data is None:
                raise ScheduleFetchError("invalid_data", "empty or non-JSON body", status=r.status)
            try:
                return ActiveRoutesResponse.model_validate(data).to_schedules()
            except ValidationError as e:
                raise ScheduleFetchError("invalid_data", str(e), status=r.status) from e

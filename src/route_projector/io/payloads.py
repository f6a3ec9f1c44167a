# io/payloads.py
"""Wire models for the active-routes endpoint.

The backend answers with snake_case keys; older builds used camelCase, so both
spellings are accepted. Unknown keys are ignored.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from route_projector.domain.entities.geography import Coordinate
from route_projector.domain.schedule import PositionSample, RouteType, Schedule


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def _coord(lat: float | None, lng: float | None) -> Coordinate | None:
    if lat is None or lng is None:
        return None
    return Coordinate(lat, lng)


def _timestamp(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


class ScreenSessionPayload(_Wire):
    id: int | None = None
    assigned_schedule_id: int | None = None
    session_date: str | None = None
    actual_start_time: str | None = None
    actual_end_time: str | None = None
    current_lat: float | None = None
    current_lng: float | None = None
    battery_level: int | None = None
    signal_strength: int | None = None
    status: str | None = None
    last_update: str | None = None

    def to_sample(self) -> PositionSample:
        return PositionSample(
            sample_id=self.id,
            coordinate=_coord(self.current_lat, self.current_lng),
            captured_at=_timestamp(self.last_update) or _timestamp(self.actual_start_time),
            status=self.status,
        )


class SchedulePayload(_Wire):
    id: int
    route_id: int | None = None
    assigned_employee_id: int | None = None
    title: str | None = None
    schedule_date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    route_type: str | None = None
    start_lat: float | None = None
    start_lng: float | None = None
    end_lat: float | None = None
    end_lng: float | None = None
    center_lat: float | None = None
    center_lng: float | None = None
    radius_meters: float | None = None
    status: str | None = None
    screen_sessions: list[ScreenSessionPayload] | None = None

    def to_schedule(self) -> Schedule:
        return Schedule(
            id=self.id,
            route_type=RouteType.parse(self.route_type),
            start=_coord(self.start_lat, self.start_lng),
            end=_coord(self.end_lat, self.end_lng),
            center=_coord(self.center_lat, self.center_lng),
            radius_m=self.radius_meters,
            samples=tuple(s.to_sample() for s in self.screen_sessions or ()),
            title=self.title,
            status=self.status,
            schedule_date=self.schedule_date,
        )


class ActiveRoutesData(_Wire):
    schedules: list[SchedulePayload] = Field(default_factory=list)


class ActiveRoutesResponse(_Wire):
    success: bool = True
    message: str = ""
    data: ActiveRoutesData = Field(default_factory=ActiveRoutesData)

    def to_schedules(self) -> list[Schedule]:
        return [s.to_schedule() for s in self.data.schedules]


class ErrorPayload(_Wire):
    message: str = ""

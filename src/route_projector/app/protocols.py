from collections.abc import Callable
from typing import Protocol, runtime_checkable

from route_projector.app.events import DirectionPathAdded
from route_projector.domain.entities.geography import Coordinate, Path
from route_projector.domain.schedule import Schedule

Listener = Callable[[DirectionPathAdded], None]


@runtime_checkable
class WalkingDirectionsProvider(Protocol):
    """
    Responsibilities:
      • Resolve a walking path between two coordinates.
      • Return None when the service finds no route; raise on transport errors.
    No retries are expected from callers; a provider may retry internally.
    """

    async def request_walking_path(self, start: Coordinate, end: Coordinate) -> Path | None: ...


@runtime_checkable
class ScheduleSource(Protocol):
    """Supplies the schedules for one user; failures raise ScheduleFetchError."""

    async def fetch_schedules(
        self,
        user_id: str,
        *,
        status: str | None = None,
        employee_id: int | None = None,
    ) -> list[Schedule]: ...

# domain/schedule.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from route_projector.domain.entities.geography import Coordinate

DEFAULT_RADIUS_M = 1000.0


class RouteType(Enum):
    FIXED_ROUTE = "fixed_route"
    AREA_ROUTE = "area_route"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: "str | RouteType | None") -> "RouteType":
        """Map a wire value to a route type; anything unrecognised is UNKNOWN."""
        if isinstance(raw, RouteType):
            return raw
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class PositionSample:
    sample_id: int | None = None
    coordinate: Coordinate | None = None  # None => reading without a fix
    captured_at: datetime | None = None
    status: str | None = None


@dataclass(frozen=True)
class Schedule:
    id: int
    route_type: RouteType = RouteType.UNKNOWN
    start: Coordinate | None = None
    end: Coordinate | None = None
    center: Coordinate | None = None
    radius_m: float | None = None
    samples: tuple[PositionSample, ...] = field(default_factory=tuple)
    title: str | None = None
    status: str | None = None
    schedule_date: str | None = None

    @property
    def has_fixed_geometry(self) -> bool:
        return (
            self.route_type is RouteType.FIXED_ROUTE
            and self.start is not None
            and self.end is not None
        )

    @property
    def has_area_geometry(self) -> bool:
        return self.route_type is RouteType.AREA_ROUTE and self.center is not None

    def effective_radius_m(self, default: float = DEFAULT_RADIUS_M) -> float:
        if self.radius_m is None or self.radius_m <= 0:
            return default
        return float(self.radius_m)

    def trail_coordinates(self) -> list[Coordinate]:
        return [s.coordinate for s in self.samples if s.coordinate is not None]

    def coordinates(self) -> list[Coordinate]:
        """Every coordinate tied to this schedule: start, end, center, then samples."""
        out = [c for c in (self.start, self.end, self.center) if c is not None]
        out.extend(self.trail_coordinates())
        return out

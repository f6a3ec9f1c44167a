# domain/projection.py
from dataclasses import dataclass, field
from enum import Enum

from route_projector.domain.entities.geography import Circle, Coordinate, Path, Region


class AnnotationRole(Enum):
    START = "start"
    END = "end"
    WAYPOINT = "waypoint"


class SizeClass(Enum):
    LARGE = "large"  # schedule geometry
    SMALL = "small"  # individual samples


@dataclass(frozen=True)
class Annotation:
    coordinate: Coordinate
    role: AnnotationRole
    schedule_id: int
    size: SizeClass = SizeClass.LARGE


@dataclass
class ProjectionResult:
    generation: int
    viewport: Region
    annotations: list[Annotation] = field(default_factory=list)
    area_circles: list[Circle] = field(default_factory=list)
    session_trails: list[Path] = field(default_factory=list)
    # filled in asynchronously, one entry per resolved walking lookup
    direction_paths: list[Path] = field(default_factory=list)

    def for_schedule(self, schedule_id: int) -> list[Annotation]:
        return [a for a in self.annotations if a.schedule_id == schedule_id]

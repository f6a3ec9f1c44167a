from dataclasses import dataclass


# Core geometry types, WGS84 degrees
@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    @classmethod
    def of(cls, value: "Coordinate | tuple[float, float]") -> "Coordinate":
        return value if isinstance(value, Coordinate) else cls(float(value[0]), float(value[1]))

    def as_tuple(self) -> tuple[float, float]:
        return self.lat, self.lng


@dataclass(frozen=True)
class Region:
    center: Coordinate
    lat_span: float
    lng_span: float


@dataclass(frozen=True)
class Circle:
    center: Coordinate
    radius_m: float
    schedule_id: int | None = None


@dataclass(frozen=True)
class Path:
    coordinates: tuple[Coordinate, ...]
    schedule_id: int | None = None  # None => not tied to a schedule

    def __len__(self) -> int:
        return len(self.coordinates)

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- VIEWPORT ---------------------


class ViewportModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    default_center: tuple[float, float] = (41.0251, 28.9934)  # Istanbul
    default_span: tuple[float, float] = (0.05, 0.05)
    single_route_factor: float = 1.5
    single_route_min_span: float = 0.01
    area_padding: float = 2.2
    meters_per_degree: float = 111_000.0
    selected_factor: float = 1.3
    selected_min_span: float = 0.015
    overview_factor: float = 1.2
    overview_min_span: float = 0.02
    default_radius_m: float = 1000.0

    @field_validator(
        "single_route_factor",
        "single_route_min_span",
        "area_padding",
        "meters_per_degree",
        "selected_factor",
        "selected_min_span",
        "overview_factor",
        "overview_min_span",
        "default_radius_m",
    )
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("default_span")
    @classmethod
    def _positive_span(cls, v: tuple[float, float]) -> tuple[float, float]:
        if min(v) <= 0:
            raise ValueError("default_span must be positive on both axes")
        return v

    @field_validator("default_center")
    @classmethod
    def _valid_center(cls, v: tuple[float, float]) -> tuple[float, float]:
        lat, lng = v
        if not (-90 <= lat <= 90 and -180 <= lng <= 180):
            raise ValueError(f"default_center out of range: {v}")
        return v


# ----------------- DIRECTIONS ---------------------


class DirectionsOsrmModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["osrm"] = "osrm"
    base_url: str = "https://router.project-osrm.org"
    profile: str = "foot"
    timeout_s: float = 30.0


class DirectionsStraightLineModel(BaseModel):
    """Offline stand-in; interpolates a straight walk."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["straight_line"] = "straight_line"
    steps: int = Field(default=1, ge=1)


class DirectionsNoneModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["none"] = "none"


DirectionsUnion = Annotated[
    DirectionsOsrmModel | DirectionsStraightLineModel | DirectionsNoneModel,
    Field(discriminator="kind"),
]


# ----------------- SCHEDULE SOURCE ---------------------


class ActiveRoutesModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    base_url: str
    endpoint: str = "getroutetrackings"
    app_token: str = ""
    token_header: str = "app_token"
    timeout_s: float = 60.0

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")


# ------------------------------------------------------------------


class ProjectorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "route-projector"
    run_id: str = "local"
    log: LogModel = LogModel()
    viewport: ViewportModel = ViewportModel()
    directions: DirectionsUnion = Field(default_factory=DirectionsNoneModel)
    source: ActiveRoutesModel | None = None
    cancel_superseded: bool = False

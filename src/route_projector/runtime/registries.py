# runtime/registries.py
from collections.abc import Callable
from typing import Any

from route_projector.app.protocols import WalkingDirectionsProvider
from route_projector.config.models import (
    DirectionsNoneModel,
    DirectionsOsrmModel,
    DirectionsStraightLineModel,
    DirectionsUnion,
)
from route_projector.services.directions import (
    NoDirections,
    OsrmWalkingDirections,
    StraightLineDirections,
)

DirectionsFactory = Callable[[DirectionsUnion, dict], WalkingDirectionsProvider | None]

_directions_registry: dict[str, DirectionsFactory] = {}


# ------------------- Directions provider registry ---------------------------


def register_directions(kind: str):
    def deco(fn: DirectionsFactory):
        _directions_registry[kind] = fn
        return fn

    return deco


def make_directions(
    cfg: DirectionsUnion, *, deps: dict[str, Any] | None = None
) -> WalkingDirectionsProvider | None:
    """
    deps can include:
      - 'session': aiohttp.ClientSession shared by network providers
    """
    try:
        factory = _directions_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown directions kind {cfg.kind!r}")
    return factory(cfg, deps or {})


@register_directions("osrm")
def _make_osrm(cfg: DirectionsOsrmModel, deps):
    return OsrmWalkingDirections(
        cfg.base_url, profile=cfg.profile, timeout_s=cfg.timeout_s, session=deps.get("session")
    )


@register_directions("straight_line")
def _make_straight(cfg: DirectionsStraightLineModel, deps):
    return StraightLineDirections(cfg.steps)


@register_directions("none")
def _make_none(cfg: DirectionsNoneModel, deps):
    return NoDirections()

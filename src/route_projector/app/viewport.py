# app/viewport.py
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from route_projector.domain.entities.geography import Coordinate, Region
from route_projector.domain.schedule import DEFAULT_RADIUS_M, Schedule


@dataclass(frozen=True)
class ViewportPolicy:
    """Framing constants; spans are in degrees, radii in meters."""

    default_center: Coordinate = Coordinate(41.0251, 28.9934)
    default_span: tuple[float, float] = (0.05, 0.05)
    # one selected fixed route
    single_route_factor: float = 1.5
    single_route_min_span: float = 0.01
    # one selected area route
    area_padding: float = 2.2
    meters_per_degree: float = 111_000.0
    # several selected schedules
    selected_factor: float = 1.3
    selected_min_span: float = 0.015
    # no explicit selection
    overview_factor: float = 1.2
    overview_min_span: float = 0.02
    default_radius_m: float = DEFAULT_RADIUS_M

    def default_region(self) -> Region:
        return Region(self.default_center, *self.default_span)


def compute_viewport(
    active: Sequence[Schedule], *, explicit: bool, policy: ViewportPolicy | None = None
) -> Region:
    """Pure framing of the active set.

    explicit=True means the active set came from a non-empty selection.
    """
    policy = policy or ViewportPolicy()
    if not active:
        return policy.default_region()

    if explicit and len(active) == 1:
        region = focus_single(active[0], policy)
        if region is not None:
            return region

    if explicit:
        return bounding_region(
            active, factor=policy.selected_factor, min_span=policy.selected_min_span, policy=policy
        )
    return bounding_region(
        active, factor=policy.overview_factor, min_span=policy.overview_min_span, policy=policy
    )


def focus_single(schedule: Schedule, policy: ViewportPolicy) -> Region | None:
    """Tight framing for one schedule; None when it has no primary geometry."""
    if schedule.has_fixed_geometry:
        a, b = schedule.start, schedule.end
        center = Coordinate((a.lat + b.lat) / 2, (a.lng + b.lng) / 2)
        f, lo = policy.single_route_factor, policy.single_route_min_span
        return Region(
            center,
            max(abs(b.lat - a.lat) * f, lo),
            max(abs(b.lng - a.lng) * f, lo),
        )
    if schedule.has_area_geometry:
        c = schedule.center
        r = schedule.effective_radius_m(policy.default_radius_m)
        m = policy.meters_per_degree
        return Region(
            c,
            r / m * policy.area_padding,
            r / (m * math.cos(math.radians(c.lat))) * policy.area_padding,
        )
    return None


def gather_coordinates(schedules: Sequence[Schedule]) -> list[Coordinate]:
    out: list[Coordinate] = []
    for s in schedules:
        out.extend(s.coordinates())
    return out


def bounding_region(
    schedules: Sequence[Schedule], *, factor: float, min_span: float, policy: ViewportPolicy
) -> Region:
    coords = gather_coordinates(schedules)
    if not coords:
        return policy.default_region()
    pts = np.array([c.as_tuple() for c in coords], dtype=float)
    lo, hi = pts.min(axis=0), pts.max(axis=0)
    mid = (lo + hi) / 2
    span = np.maximum((hi - lo) * factor, min_span)
    return Region(Coordinate(float(mid[0]), float(mid[1])), float(span[0]), float(span[1]))

# tests/app/test_projector.py
import pytest

from route_projector.app.projector import RouteMapProjector
from route_projector.app.selection import SelectionState
from route_projector.domain.entities.geography import Coordinate
from route_projector.domain.projection import AnnotationRole, SizeClass
from route_projector.domain.schedule import PositionSample, RouteType, Schedule
from route_projector.services.demo_data import demo_schedules


def _fixed(sid=1, start=(41.0082, 28.9784), end=(41.0369, 28.9850), **kw):
    return Schedule(
        id=sid,
        route_type=RouteType.FIXED_ROUTE,
        start=Coordinate.of(start) if start else None,
        end=Coordinate.of(end) if end else None,
        **kw,
    )


def _area(sid=2, center=(41.0438, 29.0083), radius=1500, **kw):
    return Schedule(
        id=sid,
        route_type=RouteType.AREA_ROUTE,
        center=Coordinate.of(center) if center else None,
        radius_m=radius,
        **kw,
    )


def _samples(*pts):
    return tuple(PositionSample(i, Coordinate.of(p) if p else None) for i, p in enumerate(pts))


class RecordingHooks:
    def __init__(self):
        self.skipped = []
        self.errors = []

    def __getattr__(self, name):
        return lambda **kw: None

    def schedule_skipped(self, *, generation, schedule_id, reason):
        self.skipped.append((schedule_id, reason))

    def schedule_error(self, *, generation, schedule_id, exc):
        self.errors.append((schedule_id, exc))


# ------------------ pass contents ------------------


def test_empty_input_gives_default_viewport_and_no_geometry():
    r = RouteMapProjector().project([], SelectionState())
    assert r.viewport.center == Coordinate(41.0251, 28.9934)
    assert (r.viewport.lat_span, r.viewport.lng_span) == (0.05, 0.05)
    assert r.annotations == [] and r.area_circles == [] and r.session_trails == []
    assert r.direction_paths == []


def test_fixed_route_single_selection_focuses_on_endpoints():
    s = _fixed()
    r = RouteMapProjector().project([s], SelectionState([1]))

    assert r.viewport.center.lat == pytest.approx(41.02255)
    assert r.viewport.center.lng == pytest.approx(28.9817)
    assert r.viewport.lat_span == pytest.approx(0.04305)
    assert r.viewport.lng_span == pytest.approx(0.01)

    roles = [(a.role, a.coordinate, a.size, a.schedule_id) for a in r.annotations]
    assert roles == [
        (AnnotationRole.START, Coordinate(41.0082, 28.9784), SizeClass.LARGE, 1),
        (AnnotationRole.END, Coordinate(41.0369, 28.9850), SizeClass.LARGE, 1),
    ]


def test_area_route_emits_circle_and_waypoint():
    r = RouteMapProjector().project([_area()])
    assert len(r.area_circles) == 1
    c = r.area_circles[0]
    assert c.center == Coordinate(41.0438, 29.0083)
    assert c.radius_m == 1500
    assert len(r.annotations) == 1
    a = r.annotations[0]
    assert a.role is AnnotationRole.WAYPOINT and a.size is SizeClass.LARGE
    assert a.coordinate == c.center


@pytest.mark.parametrize("radius", [None, 0, -5])
def test_area_route_non_positive_radius_uses_default(radius):
    r = RouteMapProjector().project([_area(radius=radius)])
    assert r.area_circles[0].radius_m == 1000


def test_trail_requires_two_valid_samples():
    sparse = _area(sid=5, samples=_samples((41.0, 29.0), None, None))
    full = _area(sid=6, samples=_samples((41.0, 29.0), (41.1, 29.1), (41.2, 29.2)))

    r = RouteMapProjector().project([sparse])
    assert r.session_trails == []

    r = RouteMapProjector().project([full])
    assert len(r.session_trails) == 1
    assert r.session_trails[0].coordinates == (
        Coordinate(41.0, 29.0),
        Coordinate(41.1, 29.1),
        Coordinate(41.2, 29.2),
    )
    assert r.session_trails[0].schedule_id == 6


def test_trail_skips_samples_without_coordinates_keeping_order():
    s = _fixed(samples=_samples((41.0, 29.0), None, (41.2, 29.2)))
    r = RouteMapProjector().project([s])
    assert r.session_trails[0].coordinates == (Coordinate(41.0, 29.0), Coordinate(41.2, 29.2))


def test_selection_filters_active_set():
    schedules = [
        _fixed(sid=1),
        _area(sid=2, samples=_samples((41.04, 29.0), (41.05, 29.01))),
        _fixed(sid=3, start=(40.9909, 29.0303), end=(41.0235, 29.0122)),
    ]
    r = RouteMapProjector().project(schedules, SelectionState([2]))
    assert {a.schedule_id for a in r.annotations} == {2}
    assert [c.schedule_id for c in r.area_circles] == [2]
    assert [t.schedule_id for t in r.session_trails] == [2]


def test_unmatched_selection_is_empty_active_set():
    r = RouteMapProjector().project([_fixed(sid=1)], SelectionState([99]))
    assert r.annotations == []
    assert r.viewport.center == Coordinate(41.0251, 28.9934)


def test_unknown_route_type_is_skipped_without_blocking_others():
    hooks = RecordingHooks()
    odd = Schedule(id=7, route_type=RouteType.parse("zigzag"), start=Coordinate(41.0, 29.0))
    r = RouteMapProjector(hooks=hooks).project([odd, _area(sid=8)])
    assert [a.schedule_id for a in r.annotations] == [8]
    assert hooks.skipped == [(7, "unknown_route_type")]


def test_fixed_route_missing_end_emits_no_geometry_but_keeps_trail():
    hooks = RecordingHooks()
    s = _fixed(sid=4, end=None, samples=_samples((41.0, 29.0), (41.01, 29.01)))
    r = RouteMapProjector(hooks=hooks).project([s])
    assert r.annotations == []
    assert len(r.session_trails) == 1
    assert hooks.skipped == [(4, "missing_endpoints")]


def test_per_schedule_error_is_contained():
    class Exploding(Schedule):
        def effective_radius_m(self, default=1000.0):
            raise RuntimeError("bad radius")

    hooks = RecordingHooks()
    bad = Exploding(id=1, route_type=RouteType.AREA_ROUTE, center=Coordinate(41.0, 29.0))
    r = RouteMapProjector(hooks=hooks).project([bad, _fixed(sid=2)])
    assert [e[0] for e in hooks.errors] == [1]
    assert {a.schedule_id for a in r.annotations} == {2}
    assert r.area_circles == []


def test_annotations_follow_schedule_input_order():
    r = RouteMapProjector().project(demo_schedules())
    assert [a.schedule_id for a in r.annotations] == [1, 1, 2, 3, 3]
    assert [t.schedule_id for t in r.session_trails] == [2, 3]


def test_projection_is_deterministic():
    schedules = demo_schedules()
    p = RouteMapProjector()
    a = p.project(schedules, SelectionState([1, 2]))
    b = p.project(schedules, SelectionState([1, 2]))
    assert a.annotations == b.annotations
    assert a.area_circles == b.area_circles
    assert a.session_trails == b.session_trails
    assert a.viewport == b.viewport
    assert b.generation == a.generation + 1


def test_new_pass_replaces_previous_result():
    p = RouteMapProjector()
    first = p.project(demo_schedules())
    second = p.project([_area(sid=9)])
    assert p.current is second
    assert [a.schedule_id for a in second.annotations] == [9]
    assert len(first.annotations) == 5  # earlier result untouched


def test_selection_accepts_plain_iterables():
    r = RouteMapProjector().project(demo_schedules(), [3])
    assert {a.schedule_id for a in r.annotations} == {3}


def test_for_schedule_picks_that_schedules_annotations():
    r = RouteMapProjector().project(demo_schedules())
    roles = [a.role for a in r.for_schedule(3)]
    assert roles == [AnnotationRole.START, AnnotationRole.END]
    assert [a.coordinate for a in r.for_schedule(2)] == [Coordinate(41.0438, 29.0083)]
    assert r.for_schedule(42) == []

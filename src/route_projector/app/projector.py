# app/projector.py
import asyncio
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from route_projector.app.events import DirectionPathAdded
from route_projector.app.hooks import NoopHooks, ProjectorHooks
from route_projector.app.protocols import Listener, WalkingDirectionsProvider
from route_projector.app.selection import SelectionState
from route_projector.app.viewport import ViewportPolicy, compute_viewport
from route_projector.domain.entities.geography import Circle, Coordinate, Path
from route_projector.domain.projection import (
    Annotation,
    AnnotationRole,
    ProjectionResult,
    SizeClass,
)
from route_projector.domain.schedule import RouteType, Schedule


@dataclass(frozen=True)
class _Lookup:
    generation: int
    schedule_id: int
    start: Coordinate
    end: Coordinate


class RouteMapProjector:
    """
    Turns schedules into map annotations, shapes and a viewport.

    The synchronous part of a pass is built and returned by project().
    Walking-direction lookups resolve later and are appended to the result of
    the pass that requested them, as long as that pass is still current.
    """

    def __init__(
        self,
        directions: WalkingDirectionsProvider | None = None,
        *,
        policy: ViewportPolicy | None = None,
        hooks: ProjectorHooks | None = None,
        cancel_superseded: bool = False,
    ):
        self.directions = directions
        self.policy = policy or ViewportPolicy()
        self.cancel_superseded = cancel_superseded
        self._hooks = hooks or NoopHooks()
        self._generation = 0
        self._current: ProjectionResult | None = None
        self._deferred: list[_Lookup] = []
        self._tasks: dict[asyncio.Task, int] = {}  # task -> generation
        self._subs: list[Listener] = []

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> ProjectionResult | None:
        return self._current

    def on(self, listener: Listener) -> None:
        self._subs.append(listener)

    # ------------------------------------------------------------------

    def project(
        self,
        schedules: Sequence[Schedule],
        selection: SelectionState | Iterable[int] | None = None,
    ) -> ProjectionResult:
        self._generation += 1
        gen = self._generation
        self._supersede(gen)

        selected = set(selection) if selection is not None else set()
        explicit = bool(selected)
        active = [s for s in schedules if s.id in selected] if explicit else list(schedules)
        self._hooks.pass_start(
            generation=gen, supplied=len(schedules), active=len(active), explicit=explicit
        )

        result = ProjectionResult(
            generation=gen, viewport=compute_viewport(active, explicit=explicit, policy=self.policy)
        )
        lookups: list[_Lookup] = []
        for schedule in active:
            try:
                lookup = self._emit_schedule(schedule, result)
            except Exception as e:
                self._hooks.schedule_error(generation=gen, schedule_id=schedule.id, exc=e)
                continue
            if lookup is not None:
                lookups.append(lookup)

        self._current = result
        if self.directions is not None:
            for lookup in lookups:
                self._start(lookup)

        self._hooks.pass_end(
            generation=gen,
            annotations=len(result.annotations),
            circles=len(result.area_circles),
            trails=len(result.session_trails),
            lookups=len(lookups) if self.directions is not None else 0,
            viewport=result.viewport,
        )
        return result

    async def settle(self) -> ProjectionResult | None:
        """Run deferred lookups and wait until no lookup is outstanding."""
        while self._deferred or self._tasks:
            pending, self._deferred = self._deferred, []
            for lookup in pending:
                self._start(lookup)
            if self._tasks:
                await asyncio.gather(*list(self._tasks), return_exceptions=True)
                self._tasks = {t: g for t, g in self._tasks.items() if not t.done()}
        return self._current

    # ------------------------------------------------------------------

    def _emit_schedule(self, s: Schedule, result: ProjectionResult) -> _Lookup | None:
        # build everything first so a failing schedule leaves no partial output
        gen = result.generation
        annotations: list[Annotation] = []
        circles: list[Circle] = []
        lookup = None
        if s.has_fixed_geometry:
            annotations.append(Annotation(s.start, AnnotationRole.START, s.id, SizeClass.LARGE))
            annotations.append(Annotation(s.end, AnnotationRole.END, s.id, SizeClass.LARGE))
            lookup = _Lookup(gen, s.id, s.start, s.end)
        elif s.has_area_geometry:
            annotations.append(Annotation(s.center, AnnotationRole.WAYPOINT, s.id, SizeClass.LARGE))
            circles.append(Circle(s.center, s.effective_radius_m(self.policy.default_radius_m), s.id))
        else:
            self._hooks.schedule_skipped(generation=gen, schedule_id=s.id, reason=_skip_reason(s))

        trail = s.trail_coordinates()

        result.annotations.extend(annotations)
        result.area_circles.extend(circles)
        if len(trail) >= 2:
            result.session_trails.append(Path(tuple(trail), s.id))
        return lookup

    def _supersede(self, gen: int) -> None:
        for lookup in self._deferred:
            self._hooks.directions_stale(
                generation=lookup.generation, current=gen, schedule_id=lookup.schedule_id
            )
        self._deferred = []
        if self.cancel_superseded:
            for task, task_gen in list(self._tasks.items()):
                if task_gen != gen:
                    task.cancel()

    def _start(self, lookup: _Lookup) -> None:
        if lookup.generation != self._generation:
            self._hooks.directions_stale(
                generation=lookup.generation,
                current=self._generation,
                schedule_id=lookup.schedule_id,
            )
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deferred.append(lookup)  # no loop yet; settle() will start it
            return
        task = loop.create_task(self._resolve(lookup))
        self._tasks[task] = lookup.generation
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task) -> None:
        self._tasks.pop(task, None)

    async def _resolve(self, lookup: _Lookup) -> None:
        try:
            path = await self.directions.request_walking_path(lookup.start, lookup.end)
        except Exception as e:
            path, error = None, e
        else:
            error = None

        # a newer pass owns the result now; drop this completion, failed or not
        if lookup.generation != self._generation or self._current is None:
            self._hooks.directions_stale(
                generation=lookup.generation,
                current=self._generation,
                schedule_id=lookup.schedule_id,
            )
            return
        if error is not None:
            self._hooks.directions_failed(
                generation=lookup.generation, schedule_id=lookup.schedule_id, exc=error
            )
            return
        if path is None or len(path) < 2:
            self._hooks.directions_missing(
                generation=lookup.generation, schedule_id=lookup.schedule_id
            )
            return

        path = Path(path.coordinates, lookup.schedule_id)
        self._current.direction_paths.append(path)
        self._hooks.directions_resolved(
            generation=lookup.generation, schedule_id=lookup.schedule_id, points=len(path)
        )
        ev = DirectionPathAdded(generation=lookup.generation, schedule_id=lookup.schedule_id, path=path)
        for listener in list(self._subs):
            try:
                listener(ev)
            except Exception as e:
                self._hooks.listener_error(
                    generation=lookup.generation, schedule_id=lookup.schedule_id, exc=e
                )


def _skip_reason(s: Schedule) -> str:
    if s.route_type is RouteType.FIXED_ROUTE:
        return "missing_endpoints"
    if s.route_type is RouteType.AREA_ROUTE:
        return "missing_center"
    return "unknown_route_type"

# route_projector/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field

from route_projector.app.hooks import NoopHooks
from route_projector.app.projector import RouteMapProjector
from route_projector.app.protocols import ScheduleSource, WalkingDirectionsProvider
from route_projector.app.selection import SelectionState
from route_projector.app.viewport import ViewportPolicy
from route_projector.config.models import ProjectorModel, ViewportModel
from route_projector.domain.entities.geography import Coordinate
from route_projector.domain.schedule import Schedule
from route_projector.io.projector_logging import ProjectorLogging
from route_projector.runtime.registries import make_directions
from route_projector.services.active_routes import ActiveRoutesClient


@dataclass
class App:
    projector: RouteMapProjector
    selection: SelectionState
    directions: WalkingDirectionsProvider | None
    source: ScheduleSource | None
    policy: ViewportPolicy
    schedules: list[Schedule] = field(default_factory=list)

    def refresh(self, schedules=None):
        """Re-project with the current selection; None reuses the last schedules."""
        if schedules is not None:
            self.schedules = list(schedules)
        return self.projector.project(self.schedules, self.selection)

    async def load(
        self, user_id: str, *, status: str | None = None, employee_id: int | None = None
    ):
        """
        Fetch the user's schedules from the source and project them.

        ScheduleFetchError propagates and leaves the previous schedules and
        projection in place, so the caller can refresh with other data.
        """
        if self.source is None:
            raise RuntimeError("no schedule source configured")
        schedules = await self.source.fetch_schedules(
            user_id, status=status, employee_id=employee_id
        )
        return self.refresh(schedules)


def policy_from_model(m: ViewportModel) -> ViewportPolicy:
    return ViewportPolicy(
        default_center=Coordinate(*m.default_center),
        default_span=m.default_span,
        single_route_factor=m.single_route_factor,
        single_route_min_span=m.single_route_min_span,
        area_padding=m.area_padding,
        meters_per_degree=m.meters_per_degree,
        selected_factor=m.selected_factor,
        selected_min_span=m.selected_min_span,
        overview_factor=m.overview_factor,
        overview_min_span=m.overview_min_span,
        default_radius_m=m.default_radius_m,
    )


def build(
    cfg: ProjectorModel | Mapping | None = None, *, use_logging: bool = True, session=None
) -> App:
    # 0) Validate config
    if cfg is None:
        model = ProjectorModel()
    else:
        model = cfg if isinstance(cfg, ProjectorModel) else ProjectorModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        ProjectorLogging(
            run_id=model.run_id,
            level="DEBUG" if model.log.debug else model.log.level,
            debug=model.log.debug,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Collaborators
    policy = policy_from_model(model.viewport)
    directions = make_directions(model.directions, deps={"session": session})
    source = None
    if model.source is not None:
        source = ActiveRoutesClient(
            model.source.base_url,
            app_token=model.source.app_token,
            endpoint=model.source.endpoint,
            token_header=model.source.token_header,
            timeout_s=model.source.timeout_s,
            session=session,
        )

    # 3) Projector (inject deps explicitly)
    projector = RouteMapProjector(
        directions,
        policy=policy,
        hooks=hooks,
        cancel_superseded=model.cancel_superseded,
    )
    return App(projector, SelectionState(), directions, source, policy)

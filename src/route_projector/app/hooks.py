# app/hooks.py
from typing import Protocol

from route_projector.domain.entities.geography import Region


class ProjectorHooks(Protocol):
    def pass_start(self, *, generation: int, supplied: int, active: int, explicit: bool): ...
    def pass_end(
        self, *, generation: int, annotations: int, circles: int, trails: int, lookups: int,
        viewport: Region,
    ): ...
    def schedule_skipped(self, *, generation: int, schedule_id: int, reason: str): ...
    def schedule_error(self, *, generation: int, schedule_id: int, exc: BaseException): ...
    def directions_resolved(self, *, generation: int, schedule_id: int, points: int): ...
    def directions_missing(self, *, generation: int, schedule_id: int): ...
    def directions_failed(self, *, generation: int, schedule_id: int, exc: BaseException): ...
    def directions_stale(self, *, generation: int, current: int, schedule_id: int): ...
    def listener_error(self, *, generation: int, schedule_id: int, exc: BaseException): ...


class NoopHooks:
    def pass_start(self, **_):
        pass

    def pass_end(self, **_):
        pass

    def schedule_skipped(self, **_):
        pass

    def schedule_error(self, **_):
        pass

    def directions_resolved(self, **_):
        pass

    def directions_missing(self, **_):
        pass

    def directions_failed(self, **_):
        pass

    def directions_stale(self, **_):
        pass

    def listener_error(self, **_):
        pass

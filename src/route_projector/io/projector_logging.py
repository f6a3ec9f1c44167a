# io/projector_logging.py
import json
import logging
import sys

from route_projector.app.hooks import NoopHooks
from route_projector.domain.entities.geography import Region


def _default_json_logger(name="route_projector", level="INFO"):
    """Logger writing one JSON object per record to stdout; extra fields are merged in."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


def _region(r: Region) -> dict:
    return {
        "lat": r.center.lat,
        "lng": r.center.lng,
        "lat_span": r.lat_span,
        "lng_span": r.lng_span,
    }


class ProjectorLogging(NoopHooks):
    """
    Structured logs for projection passes and direction lookups.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.log = logger or _default_json_logger(level=level)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    # --------------- passes -----------------------------

    def pass_start(self, *, generation: int, supplied: int, active: int, explicit: bool):
        self._emit(
            "INFO", "pass_start", generation=generation, supplied=supplied, active=active,
            explicit=explicit,
        )

    def pass_end(self, *, generation: int, viewport: Region, **counts):
        self._emit("INFO", "pass_end", generation=generation, viewport=_region(viewport), **counts)

    def schedule_skipped(self, *, generation: int, schedule_id: int, reason: str):
        if self.debug:
            self._emit(
                "DEBUG", "schedule_skipped", generation=generation, schedule_id=schedule_id,
                reason=reason,
            )

    def schedule_error(self, *, generation: int, schedule_id: int, exc: BaseException):
        self._emit(
            "WARNING", "schedule_error", generation=generation, schedule_id=schedule_id,
            error=f"{type(exc).__name__}: {exc}",
        )

    # --------------- directions -----------------------------

    def directions_resolved(self, *, generation: int, schedule_id: int, points: int):
        self._emit(
            "INFO", "directions_resolved", generation=generation, schedule_id=schedule_id,
            points=points,
        )

    def directions_missing(self, *, generation: int, schedule_id: int):
        if self.debug:
            self._emit("DEBUG", "directions_missing", generation=generation, schedule_id=schedule_id)

    def directions_failed(self, *, generation: int, schedule_id: int, exc: BaseException):
        self._emit(
            "WARNING", "directions_failed", generation=generation, schedule_id=schedule_id,
            error=f"{type(exc).__name__}: {exc}",
        )

    def directions_stale(self, *, generation: int, current: int, schedule_id: int):
        if self.debug:
            self._emit(
                "DEBUG", "directions_stale", generation=generation, current=current,
                schedule_id=schedule_id,
            )

    def listener_error(self, *, generation: int, schedule_id: int, exc: BaseException):
        self._emit(
            "WARNING", "listener_error", generation=generation, schedule_id=schedule_id,
            error=f"{type(exc).__name__}: {exc}",
        )

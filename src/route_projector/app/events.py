# app/events.py
from dataclasses import dataclass

from route_projector.domain.entities.geography import Path


@dataclass(frozen=True)
class DirectionPathAdded:
    generation: int  # pass that requested the lookup; always the current one when published
    schedule_id: int
    path: Path

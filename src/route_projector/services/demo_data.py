# services/demo_data.py
from datetime import datetime

from route_projector.domain.entities.geography import Coordinate
from route_projector.domain.schedule import PositionSample, RouteType, Schedule


def demo_schedules() -> list[Schedule]:
    """Fixed Istanbul data set: two walking routes and one area route with a trail.

    Whether to show this instead of real data is the caller's call.
    """
    return [
        Schedule(
            id=1,
            route_type=RouteType.FIXED_ROUTE,
            start=Coordinate(41.0082, 28.9784),  # Sultanahmet
            end=Coordinate(41.0369, 28.9850),  # Taksim
            title="Sultanahmet - Taksim",
            status="active",
            schedule_date="2024-01-15",
        ),
        Schedule(
            id=2,
            route_type=RouteType.AREA_ROUTE,
            center=Coordinate(41.0438, 29.0083),  # Besiktas
            radius_m=1500,
            samples=(
                PositionSample(4, Coordinate(41.0422, 29.0083), datetime(2024, 1, 16, 10, 30)),
                PositionSample(5, Coordinate(41.0400, 29.0100), datetime(2024, 1, 16, 11, 0)),
                PositionSample(6, Coordinate(41.0390, 29.0060), datetime(2024, 1, 16, 12, 30)),
            ),
            title="Besiktas area",
            status="active",
            schedule_date="2024-01-16",
        ),
        Schedule(
            id=3,
            route_type=RouteType.FIXED_ROUTE,
            start=Coordinate(40.9909, 29.0303),  # Kadikoy
            end=Coordinate(41.0235, 29.0122),  # Uskudar
            samples=(
                PositionSample(7, Coordinate(40.9909, 29.0303), datetime(2024, 1, 17, 8, 30)),
                PositionSample(8, Coordinate(41.0072, 29.0212), datetime(2024, 1, 17, 10, 0)),
                PositionSample(9, Coordinate(41.0235, 29.0122), datetime(2024, 1, 17, 12, 0)),
            ),
            title="Kadikoy - Uskudar",
            status="active",
            schedule_date="2024-01-17",
        ),
    ]

# main.py
import asyncio
import json

from route_projector.app.build import build
from route_projector.services.demo_data import demo_schedules


async def run(selected: list[int] | None = None):
    app = build(
        {
            "name": "demo",
            "run_id": "demo-1",
            "directions": {"kind": "straight_line", "steps": 4},
        }
    )
    schedules = demo_schedules()

    app.selection.select_all(selected or [])
    app.projector.on(lambda ev: print(f"direction path for schedule {ev.schedule_id}"))

    app.refresh(schedules)
    result = await app.projector.settle()

    v = result.viewport
    print(
        json.dumps(
            {
                "generation": result.generation,
                "annotations": len(result.annotations),
                "circles": len(result.area_circles),
                "trails": len(result.session_trails),
                "direction_paths": len(result.direction_paths),
                "viewport": [v.center.lat, v.center.lng, v.lat_span, v.lng_span],
            }
        )
    )


if __name__ == "__main__":
    asyncio.run(run())

# services/directions.py
from typing import Any

import aiohttp

from route_projector.app.protocols import WalkingDirectionsProvider
from route_projector.domain.entities.geography import Coordinate, Path


class OsrmWalkingDirections(WalkingDirectionsProvider):
    """Walking paths from an OSRM server (route service, GeoJSON geometry)."""

    def __init__(
        self,
        base_url: str,
        *,
        profile: str = "foot",
        timeout_s: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._session = session

    def url_for(self, start: Coordinate, end: Coordinate) -> str:
        coords = f"{start.lng},{start.lat};{end.lng},{end.lat}"
        return (
            f"{self.base_url}/route/v1/{self.profile}/{coords}"
            "?overview=full&geometries=geojson&steps=false"
        )

    async def request_walking_path(self, start: Coordinate, end: Coordinate) -> Path | None:
        url = self.url_for(start, end)
        if self._session is not None:
            return await self._get(self._session, url)
        async with aiohttp.ClientSession(timeout=self.timeout) as s:
            return await self._get(s, url)

    async def _get(self, session, url: str) -> Path | None:
        async with session.get(url) as r:
            if r.status == 400:
                # OSRM answers 400 with code=NoRoute/NoSegment for unroutable points
                return parse_osrm_route(await r.json(content_type=None))
            r.raise_for_status()
            return parse_osrm_route(await r.json(content_type=None))


def parse_osrm_route(data: dict[str, Any]) -> Path | None:
    if data.get("code") != "Ok" or not data.get("routes"):
        return None
    coords = data["routes"][0].get("geometry", {}).get("coordinates", [])
    # GeoJSON order is [lng, lat]
    points = tuple(Coordinate(float(c[1]), float(c[0])) for c in coords if len(c) >= 2)
    return Path(points) if len(points) >= 2 else None


class StraightLineDirections(WalkingDirectionsProvider):
    """Offline provider: evenly spaced points on the straight line start -> end."""

    def __init__(self, steps: int = 1):
        if steps < 1:
            raise ValueError("steps must be >= 1")
        self.steps = steps

    async def request_walking_path(self, start: Coordinate, end: Coordinate) -> Path | None:
        n = self.steps
        return Path(
            tuple(
                Coordinate(
                    start.lat + (end.lat - start.lat) * i / n,
                    start.lng + (end.lng - start.lng) * i / n,
                )
                for i in range(n + 1)
            )
        )


class NoDirections(WalkingDirectionsProvider):
    async def request_walking_path(self, start: Coordinate, end: Coordinate) -> Path | None:
        return None

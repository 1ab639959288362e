"""Camera and viewport geometry — Web Mercator bounds from camera state.

Convention:
    - Coordinates are [lng, lat] in degrees
    - Tiles are 512 px (vector map convention), world size = 512 * 2**zoom
    - Latitude is clamped to the Mercator limit
"""

from __future__ import annotations

import math
from dataclasses import dataclass

TILE_SIZE = 512
MAX_LATITUDE = 85.051129


@dataclass(frozen=True)
class Viewport:
    """A geographic bounding box (west, south, east, north)."""

    west: float
    south: float
    east: float
    north: float

    def bbox_param(self) -> str:
        """Query string form: ``west,south,east,north``."""
        return f"{self.west},{self.south},{self.east},{self.north}"

    @classmethod
    def parse(cls, bbox: str) -> "Viewport":
        """Parse ``west,south,east,north``.

        Raises:
            ValueError: On a wrong number of parts, non-numbers, or south > north.
        """
        parts = [p.strip() for p in bbox.split(",")]
        if len(parts) != 4:
            raise ValueError(f"bbox must have 4 comma-separated numbers, got {len(parts)}")
        west, south, east, north = (float(p) for p in parts)
        if south > north:
            raise ValueError("bbox south must not exceed north")
        return cls(west, south, east, north)

    def intersects(self, bounds: tuple[float, float, float, float]) -> bool:
        """True if the (west, south, east, north) envelope overlaps this box."""
        w, s, e, n = bounds
        return not (e < self.west or w > self.east or n < self.south or s > self.north)


@dataclass(frozen=True)
class Camera:
    """Map camera state: center, zoom and canvas size in pixels."""

    center_lng: float
    center_lat: float
    zoom: float
    width: int = 1280
    height: int = 800

    @property
    def world_size(self) -> float:
        return TILE_SIZE * math.pow(2, self.zoom)

    def viewport(self) -> Viewport:
        """Geographic bounds currently visible through this camera."""
        size = self.world_size
        cx = _lng_to_x(self.center_lng, size)
        cy = _lat_to_y(self.center_lat, size)
        half_w = self.width / 2
        half_h = self.height / 2
        west = _x_to_lng(cx - half_w, size)
        east = _x_to_lng(cx + half_w, size)
        north = _y_to_lat(max(cy - half_h, 0.0), size)
        south = _y_to_lat(min(cy + half_h, size), size)
        return Viewport(west=west, south=south, east=east, north=north)


def _clamp_lat(lat: float) -> float:
    return max(-MAX_LATITUDE, min(MAX_LATITUDE, lat))


def _lng_to_x(lng: float, size: float) -> float:
    return (lng + 180.0) / 360.0 * size


def _lat_to_y(lat: float, size: float) -> float:
    phi = math.radians(_clamp_lat(lat))
    return (1 - math.log(math.tan(math.pi / 4 + phi / 2)) / math.pi) / 2 * size


def _x_to_lng(x: float, size: float) -> float:
    return x / size * 360.0 - 180.0


def _y_to_lat(y: float, size: float) -> float:
    n = math.pi * (1 - 2 * y / size)
    return math.degrees(math.atan(math.sinh(n)))

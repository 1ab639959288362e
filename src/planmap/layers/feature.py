"""Feature, FeatureCollection and Layer dataclasses for the drawing session.

All coordinates are stored in GeoJSON convention: [lng, lat].
"""

from __future__ import annotations

import copy
import json
import time
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Iterator

GEOMETRY_TYPES = ("Point", "LineString", "Polygon")

# Prefix marks identifiers invented client-side; the backend replaces them on save.
SYNTHETIC_ID_PREFIX = "f_"


@dataclass
class Feature:
    """A single drawn or fetched shape.

    Attributes:
        geometry_type: One of "Point", "LineString", "Polygon".
        coordinates: GeoJSON-style coordinate arrays.
            Point: [lng, lat]
            LineString: [[lng, lat], [lng, lat], ...]
            Polygon: [[[lng, lat], [lng, lat], ...]]  (list of rings)
        properties: Arbitrary key-value metadata.
        feature_id: Backend identifier, a synthesized one, or None when unknown.
    """

    geometry_type: str
    coordinates: list
    properties: dict = field(default_factory=dict)
    feature_id: str | None = None

    def key(self) -> tuple[str, str, str]:
        """Identity-free comparison key (geometry + properties)."""
        return (
            self.geometry_type,
            json.dumps(self.coordinates, sort_keys=True),
            json.dumps(self.properties, sort_keys=True, default=str),
        )

    def envelope(self) -> tuple[float, float, float, float]:
        """Bounding box of the geometry as (west, south, east, north)."""
        points = list(_iter_positions(self.coordinates))
        if not points:
            raise ValueError(f"Feature {self.feature_id!r} has no coordinates")
        lngs = [p[0] for p in points]
        lats = [p[1] for p in points]
        return (min(lngs), min(lats), max(lngs), max(lats))

    def copy(self) -> "Feature":
        return Feature(
            geometry_type=self.geometry_type,
            coordinates=copy.deepcopy(self.coordinates),
            properties=copy.deepcopy(self.properties),
            feature_id=self.feature_id,
        )


class FeatureCollection:
    """An ordered group of features exchanged as one unit."""

    def __init__(self, features: Iterable[Feature] | None = None) -> None:
        self.features: list[Feature] = list(features or [])

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureCollection):
            return NotImplemented
        return self.features == other.features

    def __repr__(self) -> str:
        return f"FeatureCollection({len(self.features)} features)"

    @property
    def is_empty(self) -> bool:
        return not self.features

    def ids(self) -> list[str | None]:
        return [f.feature_id for f in self.features]

    def keys(self) -> list[tuple[str, str, str]]:
        """Comparison keys of every feature, sorted for set-style equality."""
        return sorted(f.key() for f in self.features)

    def copy(self) -> "FeatureCollection":
        return FeatureCollection(f.copy() for f in self.features)


@dataclass
class Layer:
    """A visual map layer over the rendered feature source.

    Purely presentational; never sent to the backend.

    Attributes:
        name: Unique display layer name.
        color: CSS color used for fill, stroke or circle paint.
        geometry_type: Geometry the layer draws ("Point", "LineString", "Polygon").
        visible: Whether the layer is currently rendered.
    """

    name: str
    color: str
    geometry_type: str = "Polygon"
    visible: bool = True


def synthesize_id(taken: set[str] | None = None) -> str:
    """Build a client-side feature id: ``f_<unix-ms>_<8 hex>``.

    Ids already present in ``taken`` are never returned; the new id is
    added to ``taken`` so a batch stays collision free.
    """
    taken = taken if taken is not None else set()
    while True:
        candidate = f"{SYNTHETIC_ID_PREFIX}{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
        if candidate not in taken:
            taken.add(candidate)
            return candidate


def assign_missing_ids(collection: FeatureCollection) -> int:
    """Give every id-less feature a unique synthesized id, in place.

    Returns:
        Number of ids assigned.
    """
    taken = {f.feature_id for f in collection if f.feature_id is not None}
    assigned = 0
    for feature in collection:
        if feature.feature_id is None:
            feature.feature_id = synthesize_id(taken)
            assigned += 1
    return assigned


def _iter_positions(coords) -> Iterator[list]:
    if isinstance(coords, str):
        return
    if coords and isinstance(coords[0], (int, float)):
        yield coords
        return
    for part in coords or []:
        yield from _iter_positions(part)

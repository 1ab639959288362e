"""DrawLayer — the editable working set — and the mirror into the rendered source.

Programmatic calls (``add``, ``delete``, ``delete_all``) are silent, like
a drawing widget's API. User interactions (``draw``, ``edit``, ``trash``)
publish ``draw.create``, ``draw.update`` and ``draw.delete`` on the bus.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from planmap.comms.event_bus import EventBus
from planmap.layers.feature import GEOMETRY_TYPES, Feature, FeatureCollection, synthesize_id
from planmap.map.source import RenderedSource

DRAW_EVENTS = ("draw.create", "draw.update", "draw.delete")


class DrawLayer:
    """Interactive drawing widget's feature set, keyed by feature id."""

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._features: dict[str, Feature] = {}

    def __len__(self) -> int:
        return len(self._features)

    def get(self, feature_id: str) -> Feature | None:
        feature = self._features.get(feature_id)
        return feature.copy() if feature else None

    def get_all(self) -> FeatureCollection:
        """Copy of every feature, in insertion order."""
        return FeatureCollection(f.copy() for f in self._features.values())

    # ------------------------------------------------------------------
    # Programmatic API (silent)
    # ------------------------------------------------------------------

    def add(self, feature: Feature) -> str:
        """Insert or replace a feature.

        Returns:
            The feature id (synthesized when the feature had none).

        Raises:
            ValueError: If the geometry is not a valid Point, LineString or Polygon.
        """
        validate_geometry(feature.geometry_type, feature.coordinates)
        stored = feature.copy()
        if stored.feature_id is None:
            stored.feature_id = synthesize_id(set(self._features))
        self._features[stored.feature_id] = stored
        return stored.feature_id

    def delete(self, feature_id: str) -> bool:
        return self._features.pop(feature_id, None) is not None

    def delete_all(self) -> int:
        count = len(self._features)
        self._features.clear()
        return count

    # ------------------------------------------------------------------
    # User interactions (publish draw.* events)
    # ------------------------------------------------------------------

    def draw(self, geometry_type: str, coordinates: list, properties: dict | None = None) -> Feature:
        """Finish drawing a new shape."""
        feature = Feature(geometry_type, coordinates, dict(properties or {}))
        feature_id = self.add(feature)
        created = self._features[feature_id].copy()
        self._bus.publish("draw.create", {"features": [created]})
        return created

    def edit(
        self,
        feature_id: str,
        coordinates: list | None = None,
        properties: dict | None = None,
    ) -> Feature:
        """Move vertices and/or change properties of an existing shape.

        Raises:
            KeyError: If the feature is not in the layer.
            ValueError: If the new coordinates are invalid.
        """
        current = self._features.get(feature_id)
        if current is None:
            raise KeyError(f"Feature not found: {feature_id}")
        if coordinates is not None:
            validate_geometry(current.geometry_type, coordinates)
            current.coordinates = coordinates
        if properties is not None:
            current.properties = dict(properties)
        updated = current.copy()
        self._bus.publish("draw.update", {"features": [updated]})
        return updated

    def trash(self, feature_ids: Iterable[str]) -> list[Feature]:
        """Delete the selected shapes; unknown ids are ignored."""
        removed = [self._features.pop(fid) for fid in list(feature_ids) if fid in self._features]
        if removed:
            self._bus.publish("draw.delete", {"features": removed})
        return removed


class FeatureMirror:
    """Copies the drawing layer into the rendered source on every draw event."""

    def __init__(self, draw: DrawLayer, source: RenderedSource, bus: EventBus) -> None:
        self._draw = draw
        self._source = source
        self._bus = bus
        for event_type in DRAW_EVENTS:
            bus.subscribe(self._on_draw_event, event_type)

    def refresh(self) -> None:
        self._source.set_data(self._draw.get_all())

    def close(self) -> None:
        self._bus.unsubscribe(self._on_draw_event)

    def _on_draw_event(self, event_type: str, data: dict) -> None:
        logger.debug(f"{event_type}: mirroring {len(self._draw)} features")
        self.refresh()


def validate_geometry(geometry_type: str, coordinates) -> None:
    """Check a geometry the way the drawing widget does.

    Raises:
        ValueError: With the reason the geometry is rejected.
    """
    if geometry_type not in GEOMETRY_TYPES:
        raise ValueError(f"Unsupported geometry type: {geometry_type!r}")

    if geometry_type == "Point":
        if not _is_position(coordinates):
            raise ValueError("Point needs a [lng, lat] position")
    elif geometry_type == "LineString":
        if not isinstance(coordinates, list) or len(coordinates) < 2:
            raise ValueError("LineString needs at least 2 positions")
        if not all(_is_position(p) for p in coordinates):
            raise ValueError("LineString contains an invalid position")
    else:
        if not isinstance(coordinates, list) or not coordinates:
            raise ValueError("Polygon needs at least one ring")
        for ring in coordinates:
            if not isinstance(ring, list) or len(ring) < 4:
                raise ValueError("Polygon ring needs at least 4 positions")
            if not all(_is_position(p) for p in ring):
                raise ValueError("Polygon ring contains an invalid position")
            if ring[0] != ring[-1]:
                raise ValueError("Polygon ring must be closed")


def _is_position(value) -> bool:
    return (
        isinstance(value, list)
        and len(value) >= 2
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    )

"""RenderedSource — the read-only feature data the map draws."""

from __future__ import annotations

from planmap.layers.feature import FeatureCollection
from planmap.layers.manager import LayerManager


class RenderedSource:
    """Map source named ``features``; only ever replaced wholesale."""

    def __init__(self, name: str = "features") -> None:
        self.name = name
        self._data = FeatureCollection()

    @property
    def data(self) -> FeatureCollection:
        return self._data

    def set_data(self, collection: FeatureCollection) -> None:
        """Replace the rendered data with a private copy of ``collection``."""
        self._data = collection.copy()

    def visible_features(self, layers: LayerManager) -> FeatureCollection:
        """Features drawn by at least one visible layer."""
        return FeatureCollection(
            f for f in self._data if layers.visible_layers_for(f.geometry_type)
        )

"""In-memory feature store behind the mock backend."""

from __future__ import annotations

import uuid

from loguru import logger

from planmap.layers.feature import SYNTHETIC_ID_PREFIX, Feature, FeatureCollection
from planmap.map.viewport import Viewport


class FeatureStore:
    """Holds the canonical feature collection; saves overwrite it whole."""

    def __init__(self, features: list[Feature] | None = None) -> None:
        self._features: list[Feature] = []
        if features:
            self.replace(FeatureCollection(features))

    def __len__(self) -> int:
        return len(self._features)

    def all(self) -> FeatureCollection:
        return FeatureCollection(f.copy() for f in self._features)

    def query(self, viewport: Viewport) -> FeatureCollection:
        """Features whose envelope intersects ``viewport``."""
        hits = []
        for feature in self._features:
            try:
                envelope = feature.envelope()
            except (ValueError, TypeError):
                continue
            if viewport.intersects(envelope):
                hits.append(feature.copy())
        return FeatureCollection(hits)

    def replace(self, collection: FeatureCollection) -> int:
        """Overwrite the store, giving canonical ids to new features.

        Features without an id, or carrying a client-synthesized one,
        receive a ``feat_<hex>`` id.
        """
        stored = []
        for feature in collection:
            item = feature.copy()
            if item.feature_id is None or item.feature_id.startswith(SYNTHETIC_ID_PREFIX):
                item.feature_id = f"feat_{uuid.uuid4().hex[:8]}"
            stored.append(item)
        self._features = stored
        logger.info(f"Feature store replaced: {len(stored)} features")
        return len(stored)

"""ViewportSync — load the features in view and reconcile the drawing layer.

After a successful sync the rendered source holds the backend's response
and the drawing layer holds the same features; id-less features get a
synthesized id first so both sides agree exactly.

Overlapping syncs are not aborted. Each one takes a request token and
only the newest issued request may apply its response; an older response
that resolves later is discarded.
"""

from __future__ import annotations

from typing import Callable

from loguru import logger

from planmap.layers.feature import FeatureCollection, assign_missing_ids
from planmap.layers.parsers.geojson import GeoJSONFormatError
from planmap.map.draw import DrawLayer
from planmap.map.source import RenderedSource
from planmap.map.viewport import Viewport
from planmap.sync.client import FeatureClient, FeatureSyncError


class ViewportSync:
    """Fetches features for a viewport and mirrors them into both layers."""

    def __init__(
        self,
        client: FeatureClient,
        source: RenderedSource,
        draw: DrawLayer,
        set_status: Callable[[str], None],
    ) -> None:
        self._client = client
        self._source = source
        self._draw = draw
        self._set_status = set_status
        self._latest_token = 0

    async def sync(self, viewport: Viewport) -> bool:
        """Load ``viewport`` and reconcile.

        Returns:
            True if the response was applied; False on failure or when a
            newer request superseded this one. Held state is untouched
            in both of those cases.
        """
        self._latest_token += 1
        token = self._latest_token
        self._set_status("Loading features for viewport...")

        try:
            collection = await self._client.fetch_features(viewport)
        except (FeatureSyncError, GeoJSONFormatError) as e:
            logger.error(f"Viewport fetch failed for bbox={viewport.bbox_param()}: {e}")
            if token == self._latest_token:
                self._set_status("Failed to load viewport features")
            return False

        if token != self._latest_token:
            logger.warning(
                f"Discarding stale response for bbox={viewport.bbox_param()} "
                f"(request {token}, newest {self._latest_token})"
            )
            return False

        self.apply(collection)
        self._set_status(f"Loaded {len(collection)} features")
        return True

    def apply(self, collection: FeatureCollection) -> None:
        """Replace rendered data and rebuild the drawing layer from ``collection``."""
        assign_missing_ids(collection)
        self._source.set_data(collection)

        self._draw.delete_all()
        for feature in collection:
            try:
                self._draw.add(feature)
            except ValueError as e:
                logger.warning(f"Drawing layer rejected feature {feature.feature_id}: {e}")
        if len(self._draw) != len(collection):
            # Rejected or duplicate-id items; rendered must match editable
            self._source.set_data(self._draw.get_all())
        logger.info(f"Synced {len(collection)} features into the drawing layer")

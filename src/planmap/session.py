"""MapSession — owns the map state for one drawing page.

Holds the rendered source, the editable drawing layer, the visual layers
and the status line, and runs every user-facing operation against them:
initial load, debounced viewport reloads, save, export, import and
analysis. Failures are logged and reported through the status line;
they never escape to the caller and never touch held state.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Callable

from loguru import logger

from planmap.analysis import AnalysisResult, run_mock_analysis
from planmap.comms.event_bus import EventBus
from planmap.config import settings
from planmap.layers.exporters.geojson import dumps_geojson
from planmap.layers.feature import FeatureCollection
from planmap.layers.manager import LayerManager
from planmap.layers.parsers.geojson import collection_from_dict
from planmap.map.draw import DrawLayer, FeatureMirror
from planmap.map.source import RenderedSource
from planmap.map.viewport import Camera, Viewport
from planmap.sync.client import FeatureClient, FeatureSyncError
from planmap.sync.debounce import Debouncer
from planmap.sync.viewport_sync import ViewportSync


def default_camera() -> Camera:
    """Camera at the configured start position."""
    return Camera(
        center_lng=settings.map_center_lng,
        center_lat=settings.map_center_lat,
        zoom=settings.map_zoom,
        width=settings.map_width,
        height=settings.map_height,
    )


class MapSession:
    """Session context passed to every map operation."""

    def __init__(
        self,
        client: FeatureClient | None = None,
        camera: Camera | None = None,
        *,
        bus: EventBus | None = None,
        layers: LayerManager | None = None,
        scenario_name: str | None = None,
        export_dir: Path | str | None = None,
        debounce_ms: int | None = None,
        analysis_delay: float | None = None,
        alert: Callable[[str], None] | None = None,
    ) -> None:
        self.client = client or FeatureClient()
        self.camera = camera or default_camera()
        self.bus = bus or EventBus()
        self.layers = layers or LayerManager()
        self.scenario_name = scenario_name or settings.scenario_name
        self.export_dir = Path(export_dir) if export_dir is not None else settings.export_dir
        self.analysis_delay = (
            analysis_delay if analysis_delay is not None else settings.analysis_delay_seconds
        )
        self._alert = alert
        self._status = "Ready"

        self.source = RenderedSource()
        self.draw = DrawLayer(self.bus)
        self.mirror = FeatureMirror(self.draw, self.source, self.bus)
        self.viewport_sync = ViewportSync(self.client, self.source, self.draw, self.set_status)

        delay_ms = debounce_ms if debounce_ms is not None else settings.viewport_debounce_ms
        self.debouncer = Debouncer(self.sync_viewport, delay_ms / 1000.0)

    # ------------------------------------------------------------------
    # Status line
    # ------------------------------------------------------------------

    @property
    def status(self) -> str:
        return self._status

    def set_status(self, message: str) -> None:
        self._status = message
        self.bus.publish("status", {"message": message})

    @property
    def viewport(self) -> Viewport:
        return self.camera.viewport()

    # ------------------------------------------------------------------
    # Map lifecycle
    # ------------------------------------------------------------------

    async def on_load(self) -> bool:
        """Map finished loading: fetch the initial viewport."""
        return await self.sync_viewport()

    def on_camera_settled(self, camera: Camera) -> None:
        """Pan/zoom settled (moveend/zoomend); reload after the debounce delay."""
        self.camera = camera
        self.debouncer.trigger()

    async def sync_viewport(self, viewport: Viewport | None = None) -> bool:
        return await self.viewport_sync.sync(viewport or self.viewport)

    def visible_features(self) -> FeatureCollection:
        return self.source.visible_features(self.layers)

    # ------------------------------------------------------------------
    # Save / export / import
    # ------------------------------------------------------------------

    async def save(self) -> bool:
        """Upload the whole drawing layer, overwriting the backend's copy.

        On success the current viewport is reloaded so backend ids replace
        synthesized ones.
        """
        collection = self.draw.get_all()
        self.set_status("Saving to backend...")
        try:
            await self.client.save(collection)
        except FeatureSyncError as e:
            logger.error(f"Save failed: {e}")
            self.set_status("Save failed")
            if self._alert is not None:
                self._alert("Save failed, check the logs")
            return False

        logger.info(f"Saved {len(collection)} features")
        self.set_status("Saved to backend")
        await self.sync_viewport()
        return True

    def export_features(self, directory: Path | str | None = None) -> Path | None:
        """Write the drawing layer to ``<scenario>.geojson``.

        Returns:
            Path of the written file, or None when there was nothing to
            export or the write failed.
        """
        collection = self.draw.get_all()
        if collection.is_empty:
            self.set_status("Nothing to export")
            return None

        target_dir = Path(directory) if directory is not None else self.export_dir
        path = target_dir / f"{_slugify(self.scenario_name)}.geojson"
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(dumps_geojson(collection, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Export to {path} failed: {e}")
            self.set_status("Export failed")
            return None

        logger.info(f"Exported {len(collection)} features to {path}")
        self.set_status(f"Exported {len(collection)} features to {path.name}")
        return path

    def import_file(self, path: Path | str) -> int | None:
        """Replace the drawing layer with the features in a GeoJSON file.

        Items the drawing layer rejects are skipped and counted. A feature
        whose id repeats an earlier one in the file gets a synthesized id.

        Returns:
            Number of imported features, or None if the file was unusable
            (the drawing layer is then left as it was).
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
            collection, skipped = collection_from_dict(json.loads(content))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            # json.JSONDecodeError and GeoJSONFormatError are both ValueErrors
            logger.error(f"Import of {path} failed: {e}")
            self.set_status("Invalid file format")
            return None

        self.draw.delete_all()
        imported = 0
        seen: set[str] = set()
        for feature in collection:
            if feature.feature_id in seen:
                logger.warning(f"Duplicate feature id {feature.feature_id} in {path}, re-keyed")
                feature.feature_id = None
            try:
                fid = self.draw.add(feature)
                seen.add(fid)
                imported += 1
            except ValueError as e:
                skipped += 1
                logger.warning(f"Skipped imported feature {feature.feature_id}: {e}")
        self.mirror.refresh()

        if skipped:
            logger.warning(f"Import of {path}: {skipped} features skipped")
            self.set_status(f"Imported {imported} features ({skipped} skipped)")
        else:
            self.set_status(f"Imported {imported} features")
        logger.info(f"Imported {imported} features from {path}")
        return imported

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def analyze(self) -> AnalysisResult | None:
        """Score the scenario; needs at least one drawn feature."""
        count = len(self.draw)
        if count == 0:
            self.set_status("Nothing to analyze")
            return None

        self.set_status("Analyzing...")
        result = await run_mock_analysis(count, self.analysis_delay)
        self.set_status("Analysis complete")
        return result

    async def aclose(self) -> None:
        self.debouncer.cancel()
        await self.debouncer.drain()
        self.mirror.close()
        await self.client.aclose()


def _slugify(name: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9._-]+", "-", name).strip("-.")
    return slug or "scenario"

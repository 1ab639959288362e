"""Shared fixtures — sample features around the default camera and a mock backend."""

from __future__ import annotations

import httpx
import pytest

from planmap.layers.feature import Feature
from planmap.map.viewport import Camera
from planmap.session import MapSession
from planmap.sync.client import FeatureClient
from planmap_api.main import create_app
from planmap_api.store import FeatureStore

# Kuala Lumpur city centre, inside the default camera's view
PARK = Feature(
    geometry_type="Polygon",
    coordinates=[[[101.68, 3.13], [101.70, 3.13], [101.70, 3.15], [101.68, 3.15], [101.68, 3.13]]],
    properties={"name": "Merdeka Park", "landuse": "park"},
    feature_id="park-1",
)
STATION = Feature(
    geometry_type="Point",
    coordinates=[101.6869, 3.139],
    properties={"name": "Central Station"},
    feature_id="station-1",
)
ROAD = Feature(
    geometry_type="LineString",
    coordinates=[[101.66, 3.12], [101.69, 3.14], [101.72, 3.16]],
    properties={"name": "Jalan Utama"},
    feature_id="road-1",
)
# Penang, far outside the default view
FAR_AWAY = Feature(
    geometry_type="Point",
    coordinates=[100.33, 5.41],
    properties={"name": "Georgetown"},
    feature_id="far-1",
)


@pytest.fixture
def camera() -> Camera:
    return Camera(center_lng=101.6869, center_lat=3.139, zoom=12, width=1280, height=800)


@pytest.fixture
def sample_features():
    return [PARK.copy(), STATION.copy(), ROAD.copy()]


@pytest.fixture
def store(sample_features):
    return FeatureStore([*sample_features, FAR_AWAY.copy()])


@pytest.fixture
def backend(store):
    """Mock backend app with no artificial latency."""
    return create_app(store=store, latency=0)


@pytest.fixture
def make_session(backend, camera, tmp_path):
    """Factory for sessions wired to the mock backend (or a custom transport)."""

    def _make(transport: httpx.AsyncBaseTransport | None = None, **kwargs) -> MapSession:
        client = FeatureClient(
            base_url="http://planmap.test",
            transport=transport or httpx.ASGITransport(app=backend),
        )
        kwargs.setdefault("camera", camera)
        kwargs.setdefault("export_dir", tmp_path / "exports")
        kwargs.setdefault("analysis_delay", 0)
        kwargs.setdefault("debounce_ms", 10)
        return MapSession(client, **kwargs)

    return _make


@pytest.fixture
def failing_transport():
    """Factory for transports answering every request with one status code."""

    def _make(status_code: int = 500) -> httpx.MockTransport:
        return httpx.MockTransport(
            lambda request: httpx.Response(status_code, json={"detail": "boom"})
        )

    return _make

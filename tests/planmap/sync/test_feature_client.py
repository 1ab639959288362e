"""Unit tests for FeatureClient — requests against the mock backend and failures.

The client runs over httpx transports (ASGI mock backend or MockTransport),
so no network is touched.
"""
from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from planmap.layers.feature import Feature, FeatureCollection
from planmap.layers.parsers.geojson import GeoJSONFormatError
from planmap.map.viewport import Viewport
from planmap.sync.client import FeatureClient, TransportError

pytestmark = pytest.mark.unit

KL = Viewport(west=101.6, south=3.0, east=101.8, north=3.3)


def _client(transport) -> FeatureClient:
    return FeatureClient(base_url="http://planmap.test", transport=transport)


class TestFetchFeatures:
    """GET /api/features?bbox=..."""

    def test_fetch_returns_features_in_view(self, backend):
        async def _run():
            async with _client(httpx.ASGITransport(app=backend)) as client:
                return await client.fetch_features(KL)

        fc = asyncio.run(_run())
        assert sorted(fc.ids()) == ["park-1", "road-1", "station-1"]

    def test_bbox_query_parameter(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["bbox"] = request.url.params["bbox"]
            return httpx.Response(200, json={"type": "FeatureCollection", "features": []})

        async def _run():
            async with _client(httpx.MockTransport(handler)) as client:
                return await client.fetch_features(KL)

        fc = asyncio.run(_run())
        assert fc.is_empty
        assert seen == {"path": "/api/features", "bbox": "101.6,3.0,101.8,3.3"}

    def test_http_500_raises_transport_error(self, failing_transport):
        async def _run():
            async with _client(failing_transport(500)) as client:
                await client.fetch_features(KL)

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(_run())
        assert exc_info.value.status_code == 500

    def test_connection_error_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async def _run():
            async with _client(httpx.MockTransport(handler)) as client:
                await client.fetch_features(KL)

        with pytest.raises(TransportError) as exc_info:
            asyncio.run(_run())
        assert exc_info.value.status_code is None

    def test_non_json_body_raises_format_error(self):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, text="<html>"))

        async def _run():
            async with _client(transport) as client:
                await client.fetch_features(KL)

        with pytest.raises(GeoJSONFormatError):
            asyncio.run(_run())


class TestSave:
    """POST /api/save"""

    def test_save_posts_whole_collection(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"saved": 1})

        async def _run():
            async with _client(httpx.MockTransport(handler)) as client:
                await client.save(FeatureCollection([Feature("Point", [1, 2], {"n": 1}, "a")]))

        asyncio.run(_run())
        assert captured["method"] == "POST"
        assert captured["body"]["type"] == "FeatureCollection"
        assert captured["body"]["features"][0]["id"] == "a"

    def test_save_empty_collection(self, backend, store):
        async def _run():
            async with _client(httpx.ASGITransport(app=backend)) as client:
                await client.save(FeatureCollection())

        asyncio.run(_run())
        assert len(store) == 0

    def test_save_failure_raises(self, failing_transport):
        async def _run():
            async with _client(failing_transport(503)) as client:
                await client.save(FeatureCollection())

        with pytest.raises(TransportError):
            asyncio.run(_run())

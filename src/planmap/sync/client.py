"""FeatureClient — HTTP access to the planning backend.

Two calls only:
- GET  {base}/api/features?bbox=west,south,east,north
- POST {base}/api/save  (whole-collection overwrite)

Any non-200 status or transport problem raises TransportError; nothing is retried.
"""

from __future__ import annotations

import httpx
from loguru import logger

from planmap.config import settings
from planmap.layers.exporters.geojson import export_geojson
from planmap.layers.feature import FeatureCollection
from planmap.layers.parsers.geojson import GeoJSONFormatError, collection_from_dict
from planmap.map.viewport import Viewport


class FeatureSyncError(Exception):
    """Base class for failures talking to the backend."""


class TransportError(FeatureSyncError):
    """Network unreachable, timeout, or a non-200 response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FeatureClient:
    """Async client for the features backend."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.backend_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "FeatureClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_features(self, viewport: Viewport) -> FeatureCollection:
        """Features intersecting ``viewport``.

        Raises:
            TransportError: On any transport failure or non-200 status.
            GeoJSONFormatError: If the body is not a feature collection.
        """
        resp = await self._request("GET", "/api/features", params={"bbox": viewport.bbox_param()})
        try:
            body = resp.json()
        except ValueError as e:
            raise GeoJSONFormatError(f"Response is not JSON: {e}") from e
        collection, rejected = collection_from_dict(body)
        if rejected:
            logger.warning(f"Dropped {rejected} unusable features from backend response")
        return collection

    async def save(self, collection: FeatureCollection) -> None:
        """Replace everything the backend holds with ``collection``.

        Raises:
            TransportError: On any transport failure or non-200 status.
        """
        await self._request("POST", "/api/save", json=export_geojson(collection))

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        if resp.status_code != 200:
            raise TransportError(f"HTTP {resp.status_code}", status_code=resp.status_code)
        return resp

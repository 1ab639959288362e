"""Feature API endpoints — viewport query and whole-collection save."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from loguru import logger

from planmap.config import settings
from planmap.layers.exporters.geojson import export_geojson
from planmap.layers.feature import FeatureCollection
from planmap.layers.parsers.geojson import GeoJSONFormatError, collection_from_dict
from planmap.map.draw import validate_geometry
from planmap.map.viewport import Viewport
from planmap_api.store import FeatureStore

router = APIRouter(prefix="/api", tags=["features"])


def get_store(request: Request) -> FeatureStore:
    """The store owned by the app serving this request."""
    return request.app.state.store


async def _simulate_network(request: Request) -> None:
    delay = request.app.state.latency
    if delay is None:
        delay = settings.mock_api_latency
    if delay > 0:
        await asyncio.sleep(delay)


@router.get("/features")
async def get_features(
    request: Request,
    bbox: str = Query(..., description="west,south,east,north"),
    store: FeatureStore = Depends(get_store),
):
    """Features intersecting the bounding box."""
    try:
        viewport = Viewport.parse(bbox)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid bbox: {e}")

    await _simulate_network(request)
    collection = store.query(viewport)
    logger.debug(f"GET features bbox={bbox}: {len(collection)} hits")
    return export_geojson(collection)


@router.post("/save")
async def save_features(
    request: Request,
    body: dict = Body(...),
    store: FeatureStore = Depends(get_store),
):
    """Replace every stored feature with the posted collection.

    Items with unusable geometry are dropped and counted in ``rejected``.
    """
    try:
        parsed, rejected = collection_from_dict(body)
    except GeoJSONFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))

    accepted = []
    for feature in parsed:
        try:
            validate_geometry(feature.geometry_type, feature.coordinates)
        except ValueError as e:
            rejected += 1
            logger.warning(f"Save rejected feature {feature.feature_id}: {e}")
            continue
        accepted.append(feature)

    await _simulate_network(request)
    saved = store.replace(FeatureCollection(accepted))
    if rejected:
        logger.warning(f"Save dropped {rejected} unusable features")
    return {"saved": saved, "rejected": rejected}

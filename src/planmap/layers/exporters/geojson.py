"""Export a FeatureCollection to a GeoJSON dict (RFC 7946 compliant).

Uses only stdlib json. GeoJSON coordinates are [lng, lat] (already the
internal storage convention).
"""

from __future__ import annotations

import json

from planmap.layers.feature import Feature, FeatureCollection


def export_geojson(collection: FeatureCollection) -> dict:
    """Export a FeatureCollection to a GeoJSON FeatureCollection dict."""
    return {
        "type": "FeatureCollection",
        "features": [_feature_to_geojson(f) for f in collection],
    }


def dumps_geojson(collection: FeatureCollection, indent: int | None = 2) -> str:
    """Serialize a FeatureCollection to GeoJSON text (pretty-printed by default)."""
    return json.dumps(export_geojson(collection), indent=indent)


def _feature_to_geojson(feature: Feature) -> dict:
    gj = {
        "type": "Feature",
        "geometry": {
            "type": feature.geometry_type,
            "coordinates": feature.coordinates,
        },
        "properties": dict(feature.properties),
    }
    if feature.feature_id is not None:
        gj["id"] = feature.feature_id
    return gj

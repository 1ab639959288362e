"""Parse GeoJSON (RFC 7946) into a FeatureCollection using stdlib json.

Handles FeatureCollection and bare Feature documents with Point,
LineString and Polygon geometries. Coordinates are already in [lng, lat] order.
"""

from __future__ import annotations

import json

from planmap.layers.feature import GEOMETRY_TYPES, Feature, FeatureCollection


class GeoJSONFormatError(ValueError):
    """Raised when content is not a feature collection."""


def parse_geojson(geojson_string: str) -> FeatureCollection:
    """Parse a GeoJSON string into a FeatureCollection.

    Args:
        geojson_string: Raw GeoJSON content.

    Returns:
        FeatureCollection with every feature that could be parsed.

    Raises:
        GeoJSONFormatError: If the text is not JSON or carries no ``features`` array.
    """
    try:
        data = json.loads(geojson_string)
    except (json.JSONDecodeError, TypeError) as e:
        raise GeoJSONFormatError(f"Not valid JSON: {e}") from e
    collection, _ = collection_from_dict(data)
    return collection


def collection_from_dict(data) -> tuple[FeatureCollection, int]:
    """Build a FeatureCollection from decoded GeoJSON.

    Items that are not usable features are dropped.

    Returns:
        (collection, number of rejected items)

    Raises:
        GeoJSONFormatError: If ``data`` has no ``features`` array.
    """
    if isinstance(data, dict) and data.get("type") == "Feature":
        data = {"type": "FeatureCollection", "features": [data]}

    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        raise GeoJSONFormatError("Expected an object with a 'features' array")

    features: list[Feature] = []
    rejected = 0
    for raw in data["features"]:
        feature = parse_feature(raw)
        if feature is None:
            rejected += 1
        else:
            features.append(feature)
    return FeatureCollection(features), rejected


def parse_feature(raw) -> Feature | None:
    """Parse a single GeoJSON Feature dict, or None if it is unusable."""
    if not isinstance(raw, dict):
        return None

    geometry = raw.get("geometry")
    if not isinstance(geometry, dict):
        return None

    geom_type = geometry.get("type", "")
    coordinates = geometry.get("coordinates")

    if geom_type not in GEOMETRY_TYPES or not isinstance(coordinates, list) or not coordinates:
        return None

    properties = raw.get("properties") or {}
    if not isinstance(properties, dict):
        properties = {}

    feature_id = raw.get("id")
    if feature_id is not None and not isinstance(feature_id, str):
        feature_id = str(feature_id)

    return Feature(
        geometry_type=geom_type,
        coordinates=coordinates,
        properties=properties,
        feature_id=feature_id,
    )

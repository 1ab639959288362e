"""Tests for GeoJSON exporter — structure, ids, pretty printing."""

import json

import pytest

from planmap.layers.exporters.geojson import dumps_geojson, export_geojson
from planmap.layers.feature import Feature, FeatureCollection

pytestmark = pytest.mark.unit


class TestGeoJSONExporter:
    """Export FeatureCollection to GeoJSON."""

    def test_feature_collection_structure(self, sample_features):
        gj = export_geojson(FeatureCollection(sample_features))
        assert gj["type"] == "FeatureCollection"
        assert len(gj["features"]) == 3
        first = gj["features"][0]
        assert first["type"] == "Feature"
        assert first["id"] == "park-1"
        assert first["geometry"]["type"] == "Polygon"
        assert first["properties"]["landuse"] == "park"

    def test_feature_without_id_omits_key(self):
        gj = export_geojson(FeatureCollection([Feature("Point", [0, 0])]))
        assert "id" not in gj["features"][0]

    def test_empty_collection(self):
        assert export_geojson(FeatureCollection()) == {"type": "FeatureCollection", "features": []}

    def test_dumps_is_pretty_printed(self, sample_features):
        text = dumps_geojson(FeatureCollection(sample_features))
        assert "\n  " in text
        assert json.loads(text)["features"][1]["id"] == "station-1"

    def test_properties_are_copied(self):
        f = Feature("Point", [0, 0], {"n": 1})
        gj = export_geojson(FeatureCollection([f]))
        gj["features"][0]["properties"]["n"] = 2
        assert f.properties["n"] == 1

"""Tests for LayerManager — default layers, visibility, color."""

import pytest

from planmap.layers import Layer, LayerManager

pytestmark = pytest.mark.unit


@pytest.fixture
def manager():
    return LayerManager()


class TestLayerManager:
    """Visual layer registry."""

    def test_default_layers(self, manager):
        names = [layer.name for layer in manager.list_layers()]
        assert "features-fill" in names
        assert "features-point" in names
        assert manager.get_layer("features-fill").color == "#00aa88"
        assert manager.get_layer("features-point").color == "#ff3333"

    def test_empty_registry(self):
        assert LayerManager(layers=[]).list_layers() == []

    def test_defaults_not_shared_between_managers(self):
        a, b = LayerManager(), LayerManager()
        a.set_visibility("features-point", False)
        assert b.get_layer("features-point").visible is True

    def test_add_duplicate_raises(self, manager):
        with pytest.raises(ValueError):
            manager.add_layer(Layer("features-fill", "#000000"))

    def test_remove_layer(self, manager):
        assert manager.remove_layer("features-point") is True
        assert manager.get_layer("features-point") is None
        assert manager.remove_layer("features-point") is False

    def test_set_visibility(self, manager):
        manager.set_visibility("features-fill", False)
        assert manager.get_layer("features-fill").visible is False

    def test_set_visibility_unknown(self, manager):
        with pytest.raises(KeyError):
            manager.set_visibility("nope", True)

    def test_set_color(self, manager):
        manager.set_color("features-line", "#123456")
        assert manager.get_layer("features-line").color == "#123456"

    def test_visible_layers_for_geometry(self, manager):
        polygon_layers = {layer.name for layer in manager.visible_layers_for("Polygon")}
        assert polygon_layers == {"features-fill", "features-line"}
        manager.set_visibility("features-fill", False)
        manager.set_visibility("features-line", False)
        assert manager.visible_layers_for("Polygon") == []

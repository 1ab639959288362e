"""LayerManager — registry of visual map layers.

Manages the presentational layers drawn over the rendered feature
source: add, remove, get, list, visibility and color control.
"""

from __future__ import annotations

from planmap.layers.feature import Layer

DEFAULT_LAYERS = (
    Layer(name="features-fill", color="#00aa88", geometry_type="Polygon"),
    Layer(name="features-line", color="#007f66", geometry_type="Polygon"),
    Layer(name="features-line-string", color="#007f66", geometry_type="LineString"),
    Layer(name="features-point", color="#ff3333", geometry_type="Point"),
)


class LayerManager:
    """Registry of visual map layers, keyed by name."""

    def __init__(self, layers: tuple[Layer, ...] | list[Layer] | None = None) -> None:
        self._layers: dict[str, Layer] = {}
        source = DEFAULT_LAYERS if layers is None else layers
        for layer in source:
            self.add_layer(Layer(layer.name, layer.color, layer.geometry_type, layer.visible))

    def add_layer(self, layer: Layer) -> str:
        """Add a layer to the registry.

        Raises:
            ValueError: If a layer with the same name already exists.
        """
        if layer.name in self._layers:
            raise ValueError(f"Layer already exists: {layer.name}")
        self._layers[layer.name] = layer
        return layer.name

    def remove_layer(self, name: str) -> bool:
        """Remove a layer. Returns False if it didn't exist."""
        if name in self._layers:
            del self._layers[name]
            return True
        return False

    def get_layer(self, name: str) -> Layer | None:
        return self._layers.get(name)

    def list_layers(self) -> list[Layer]:
        return list(self._layers.values())

    def set_visibility(self, name: str, visible: bool) -> None:
        """Show or hide a layer.

        Raises:
            KeyError: If the layer is not found.
        """
        self._require(name).visible = visible

    def set_color(self, name: str, color: str) -> None:
        """Change a layer's display color.

        Raises:
            KeyError: If the layer is not found.
        """
        self._require(name).color = color

    def visible_layers_for(self, geometry_type: str) -> list[Layer]:
        """Visible layers that render features of ``geometry_type``."""
        return [
            layer for layer in self._layers.values()
            if layer.visible and layer.geometry_type == geometry_type
        ]

    def _require(self, name: str) -> Layer:
        layer = self._layers.get(name)
        if layer is None:
            raise KeyError(f"Layer not found: {name}")
        return layer

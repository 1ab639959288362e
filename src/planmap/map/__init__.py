"""Map-side state: camera/viewport, rendered source and the drawing layer."""

from planmap.map.draw import DrawLayer, FeatureMirror
from planmap.map.source import RenderedSource
from planmap.map.viewport import Camera, Viewport

__all__ = ["Camera", "DrawLayer", "FeatureMirror", "RenderedSource", "Viewport"]

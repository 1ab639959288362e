"""Feature model and GeoJSON import/export for the drawing session.

Parsers and exporters use only Python stdlib json.
"""

from planmap.layers.feature import Feature, FeatureCollection, Layer
from planmap.layers.manager import LayerManager

__all__ = ["Feature", "FeatureCollection", "Layer", "LayerManager"]

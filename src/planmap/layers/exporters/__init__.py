"""Exporters serializing FeatureCollections."""

"""Format parsers producing FeatureCollections."""

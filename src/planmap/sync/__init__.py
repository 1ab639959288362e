"""Backend sync: HTTP client, debounce and viewport reconciliation."""

from planmap.sync.client import FeatureClient, FeatureSyncError, TransportError
from planmap.sync.debounce import Debouncer
from planmap.sync.viewport_sync import ViewportSync

__all__ = ["Debouncer", "FeatureClient", "FeatureSyncError", "TransportError", "ViewportSync"]

"""EventBus — synchronous pub/sub for session events.

Carries drawing-widget change events (``draw.create``, ``draw.update``,
``draw.delete``) and ``status`` updates. Handlers run inline on the
publishing call, in subscription order. A failing handler is logged and
does not stop the handlers after it.
"""

from __future__ import annotations

import threading
from typing import Callable

from loguru import logger

Handler = Callable[[str, dict], None]


class EventBus:
    """Simple pub/sub that dispatches events to subscribed handlers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: list[tuple[str | None, Handler]] = []

    def subscribe(self, handler: Handler, event_type: str | None = None) -> Handler:
        """Subscribe ``handler`` to one event type, or to all when ``event_type`` is None.

        Returns the handler so it can be passed to ``unsubscribe``.
        """
        with self._lock:
            self._subscribers.append((event_type, handler))
        return handler

    def unsubscribe(self, handler: Handler) -> None:
        # Equality, not identity: each attribute access yields a new bound method
        with self._lock:
            self._subscribers = [(t, h) for t, h in self._subscribers if h != handler]

    def publish(self, event_type: str, data: dict | None = None) -> None:
        payload = data if data is not None else {}
        with self._lock:
            targets = [h for t, h in self._subscribers if t is None or t == event_type]
        for handler in targets:
            try:
                handler(event_type, payload)
            except Exception:
                logger.exception(f"Handler {handler!r} failed on {event_type}")

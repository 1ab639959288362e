"""Trailing debounce for pan/zoom settle events.

One pending timer per source: every trigger cancels the pending one and
schedules a fresh one, so the action runs once after the last event.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from loguru import logger


class Debouncer:
    """Cancel-and-reschedule timer around an async action."""

    def __init__(self, action: Callable[[], Awaitable[object]], delay: float) -> None:
        self._action = action
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """(Re)start the timer. Must be called from a running event loop."""
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def drain(self) -> None:
        """Wait for actions that have already fired."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
            self._tasks = {t for t in self._tasks if not t.done()}

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.ensure_future(self._action())
        self._tasks.add(task)
        task.add_done_callback(self._done)

    def _done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Debounced action failed: {task.exception()}")

"""One-shot timer scheduling on the asyncio event loop."""

import asyncio
import logging
from typing import Any, Callable

_LOGGER = logging.getLogger(__name__)


class Scheduler:
    """Schedules one-shot callbacks.

    Implementations return a handle exposing ``cancel()``; a cancelled
    handle must never run its callback.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run ``callback`` after ``delay`` seconds."""
        raise NotImplementedError


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """Initialize scheduler.

        Args:
            loop: Event loop to use (default: the running loop at call time)
        """
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """Schedule ``callback`` on the loop after ``delay`` seconds."""
        loop = self._loop or asyncio.get_running_loop()
        _LOGGER.debug(f"Timer scheduled in {delay:.3f}s")
        return loop.call_later(max(0.0, delay), callback)

"""Rate-limiting primitives for UI-driven events."""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Throttle:
    """Leading-edge throttle: allow at most one call per ``interval`` seconds."""

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic):
        self.interval = interval
        self._clock = clock
        self._last: Optional[float] = None

    def allow(self) -> bool:
        now = self._clock()
        if self._last is not None and now - self._last < self.interval:
            return False
        self._last = now
        return True

    def reset(self) -> None:
        self._last = None


class Debouncer:
    """
    Run ``callback`` once input has been quiet for ``delay`` seconds.

    Each ``trigger`` cancels the pending run and schedules a new one with the
    latest arguments. Only the quiet period is cancellable: once the callback
    has started it runs to completion in its own task. Must be used from
    within a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[..., Awaitable[Any]]):
        self.delay = delay
        self._callback = callback
        self._task: Optional[asyncio.Task] = None
        self._running: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self, *args: Any) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(args))

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the scheduled run, if any, and the callback to finish."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        if self._running is not None:
            await self._running

    async def _run(self, args) -> None:
        await asyncio.sleep(self.delay)
        self._running = asyncio.get_running_loop().create_task(self._invoke(args))

    async def _invoke(self, args) -> None:
        try:
            await self._callback(*args)
        except Exception:
            logger.exception("Debounced callback failed")

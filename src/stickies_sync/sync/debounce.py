"""Single-slot debounce timer on top of asyncio tasks."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from stickies_sync.utils.logging import get_logger

logger = get_logger(__name__)


class Debouncer:
    """Run ``callback`` once, ``delay`` seconds after the last ``schedule()``.

    At most one task sleeps in the pending slot; scheduling again cancels it
    and starts a fresh one. When the delay elapses the task leaves the slot
    before the callback starts, so a later ``schedule()`` or ``cancel()``
    never interrupts a callback that is already running.

    Must be used from within a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        if delay <= 0:
            msg = f"Debounce delay must be positive, got {delay}"
            raise ValueError(msg)
        self.delay = delay
        self._callback = callback
        self._pending: asyncio.Task[None] | None = None
        self._running: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> bool:
        """True while a timer is counting down."""
        return self._pending is not None and not self._pending.done()

    @property
    def running(self) -> bool:
        """True while a fired callback has not finished."""
        return bool(self._running)

    def schedule(self) -> None:
        """(Re)start the timer."""
        self.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._fire_later())

    def cancel(self) -> None:
        """Drop the pending timer, if any. Running callbacks are left alone."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> None:
        """Fire a pending timer now and wait for its callback."""
        if self.pending:
            self.cancel()
            task = asyncio.get_running_loop().create_task(self._invoke())
            self._track(task)
        await self.wait()

    async def wait(self) -> None:
        """Wait until no timer is pending and no callback is running."""
        while self.pending or self._running:
            tasks = list(self._running)
            if self._pending is not None:
                tasks.append(self._pending)
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _fire_later(self) -> None:
        await asyncio.sleep(self.delay)
        task = asyncio.current_task()
        if task is not None and self._pending is task:
            self._pending = None
            self._track(task)
        await self._invoke()

    async def _invoke(self) -> None:
        try:
            await self._callback()
        except Exception as e:
            logger.exception("debounced_callback_failed", error=str(e))
            raise

    def _track(self, task: asyncio.Task[None]) -> None:
        self._running.add(task)
        task.add_done_callback(self._running.discard)

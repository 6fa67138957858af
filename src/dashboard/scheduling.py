"""Timers and races used by the dashboard controller."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def first_settled(aw: Awaitable[T], timeout: float) -> T:
    """Race ``aw`` against a timer and return whichever settles first.

    The loser is cancelled. If the timer wins ``TimeoutError`` is raised.
    Cancelling the caller cancels both.
    """
    work = asyncio.ensure_future(aw)
    timer = asyncio.ensure_future(asyncio.sleep(timeout))
    try:
        done, _ = await asyncio.wait({work, timer}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (work, timer):
            if not task.done():
                task.cancel()

    if work in done:
        return work.result()
    raise TimeoutError(f"No result within {timeout}s")


class AutoRefreshTimer:
    """Calls ``callback`` every ``interval`` seconds until cancelled."""

    def __init__(self, callback: Callable[[], Awaitable[object]]) -> None:
        self.callback = callback
        self.interval: float | None = None
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval: float) -> None:
        """(Re)start with a new interval; any previous timer is cancelled."""
        self.cancel()
        self.interval = interval
        self._task = asyncio.create_task(self._run(interval))
        logger.info(f"Auto-refresh every {interval:.0f}s")

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
        self.interval = None

    async def _run(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                await self.callback()
            except Exception:
                logger.exception("Auto-refresh failed")


class Debouncer:
    """Runs ``callback`` once ``delay`` seconds after the last trigger."""

    def __init__(self, delay: float, callback: Callable[[], Awaitable[object]]) -> None:
        self.delay = delay
        self.callback = callback
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(self) -> None:
        self.cancel()
        self._task = asyncio.create_task(self._fire())

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._task = None

    async def _fire(self) -> None:
        await asyncio.sleep(self.delay)
        await self.callback()

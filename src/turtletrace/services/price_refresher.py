"""Periodic background price refresh."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from turtletrace.domain.views import RefreshSummary

logger = logging.getLogger(__name__)

RefreshCallable = Callable[[], Awaitable[RefreshSummary]]


class PriceRefresher:
    """
    Runs a refresh coroutine on a fixed interval until stopped.

    A failing refresh is logged and the loop waits for the next tick.
    Stopping cancels the loop task; a refresh in flight is abandoned and
    its result discarded.
    """

    def __init__(self, refresh: RefreshCallable, interval_seconds: float = 300):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._refresh = refresh
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self.runs = 0
        self.failures = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._loop(), name="price-refresher")
        logger.info("Price refresher started (every %ss)", self._interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Price refresher stopped")

    async def run_once(self) -> Optional[RefreshSummary]:
        """Run one refresh; returns None if it failed."""
        self.runs += 1
        try:
            return await self._refresh()
        except asyncio.CancelledError:
            raise
        except Exception:
            self.failures += 1
            logger.exception("Scheduled price refresh failed")
            return None

    async def _loop(self) -> None:
        while True:
            await self.run_once()
            await asyncio.sleep(self._interval)

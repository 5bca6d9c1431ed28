"""Sweep Scheduler — long-lived background task that runs the expiration sweep on a fixed interval.

Invariants:
    - Single-flight: a tick that starts while another is running is skipped
    - Every tick opens its own store session; nothing is shared with request handlers
    - A tick never raises: failures are logged (the sweep has no external caller)
    - stop() lets the current batch run to completion before returning

Design Decisions:
    - First tick runs immediately on start: items that expired while the
      process was down are hidden without waiting a full interval
    - tick(now) is public so tests drive one sweep deterministically
    - Started and stopped by the FastAPI lifespan, not at import time
"""

import asyncio
import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from enum import Enum

from sharehub.core.expiration import utc_now
from sharehub.core.repository_protocols import StoreProvider
from sharehub.services.expiration_sweep import ExpirationSweep, SweepReport

logger = logging.getLogger(__name__)

StoreOpener = Callable[[], AbstractAsyncContextManager[StoreProvider]]


class SchedulerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    STOPPING = "stopping"


class ExpirationSweepScheduler:
    """Runs ExpirationSweep every `interval_seconds` until stopped."""

    def __init__(
        self,
        open_stores: StoreOpener,
        interval_seconds: float,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._open_stores = open_stores
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None
        self.state = SchedulerState.STOPPED
        self.ticks_completed = 0
        self.ticks_skipped = 0
        self.last_reports: list[SweepReport] = []

    async def start(self) -> None:
        if self.state is not SchedulerState.STOPPED:
            return
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run_loop())
        self.state = SchedulerState.RUNNING
        logger.info(f"Expiration sweep scheduled every {self.interval_seconds}s")

    async def stop(self) -> None:
        if self.state is SchedulerState.STOPPED:
            return
        self.state = SchedulerState.STOPPING
        self._stop_event.set()
        if self._task:
            await self._task
            self._task = None
        self.state = SchedulerState.STOPPED
        logger.info("Expiration sweep scheduler stopped")

    async def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(), timeout=self.interval_seconds,
                )
            except asyncio.TimeoutError:
                continue

    async def tick(self, now: datetime | None = None) -> list[SweepReport] | None:
        """Run one sweep; returns None when skipped or when the tick failed."""
        if self._lock.locked():
            self.ticks_skipped += 1
            logger.warning("Expiration sweep still running; skipping this tick")
            return None

        async with self._lock:
            moment = now or self._clock()
            logger.info(f"Expiration sweep started at {moment.isoformat()}")
            try:
                async with self._open_stores() as stores:
                    reports = await ExpirationSweep(stores).run(moment)
            except Exception as e:
                logger.error(f"Expiration sweep failed: {e}", exc_info=True)
                return None
            self.ticks_completed += 1
            self.last_reports = reports
            logger.info(
                "Expiration sweep completed",
                extra={
                    "hidden": sum(r.hidden for r in reports),
                    "purged": sum(r.purged for r in reports),
                    "stale": sum(r.stale for r in reports),
                    "failed": sum(r.failed for r in reports),
                },
            )
            return reports

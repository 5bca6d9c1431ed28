"""Sweep scheduler — single-flight ticks, lifecycle, failure containment.

Design Decisions:
    - Ticks driven directly via tick(now) except in the lifecycle tests,
      which use a tiny interval and stop() to bound the run
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import uuid4

from sharehub.core.domain_types import ItemKind
from sharehub.services.sweep_scheduler import (
    ExpirationSweepScheduler, SchedulerState,
)

NOW = datetime(2024, 6, 1)


def _opener(stores, entered=None, gate=None):
    @asynccontextmanager
    async def open_stores():
        if entered is not None:
            entered.set()
        if gate is not None:
            await gate.wait()
        yield stores
    return open_stores


async def test_tick_runs_sweep_over_fresh_stores(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4())
    fake_stores.expirations(ItemKind.LISTING).add(listing.id, "2024-01-01")
    scheduler = ExpirationSweepScheduler(_opener(fake_stores), 300)

    reports = await scheduler.tick(NOW)

    assert listing.hidden is True
    assert scheduler.ticks_completed == 1
    assert scheduler.last_reports == reports


async def test_overlapping_tick_is_skipped(fake_stores):
    entered, gate = asyncio.Event(), asyncio.Event()
    scheduler = ExpirationSweepScheduler(_opener(fake_stores, entered, gate), 300)

    first = asyncio.create_task(scheduler.tick(NOW))
    await entered.wait()
    skipped = await scheduler.tick(NOW)
    gate.set()
    await first

    assert skipped is None
    assert scheduler.ticks_skipped == 1
    assert scheduler.ticks_completed == 1


async def test_failing_tick_is_contained(fake_stores):
    @asynccontextmanager
    async def broken():
        raise RuntimeError("database unreachable")
        yield fake_stores

    scheduler = ExpirationSweepScheduler(broken, 300)

    assert await scheduler.tick(NOW) is None
    assert scheduler.ticks_completed == 0
    # Lock released: the next tick runs
    scheduler._open_stores = _opener(fake_stores)
    assert await scheduler.tick(NOW) is not None


async def test_clock_used_when_no_now_given(fake_stores):
    request = fake_stores.items(ItemKind.REQUEST).add(uuid4())
    fake_stores.expirations(ItemKind.REQUEST).add(request.id, "2024-01-01")
    scheduler = ExpirationSweepScheduler(
        _opener(fake_stores), 300, clock=lambda: NOW,
    )

    await scheduler.tick()

    assert request.hidden is True


async def test_start_runs_first_tick_immediately_and_stop_ends_loop(fake_stores):
    listing = fake_stores.items(ItemKind.LISTING).add(uuid4())
    fake_stores.expirations(ItemKind.LISTING).add(listing.id, "2024-01-01")
    entered = asyncio.Event()
    scheduler = ExpirationSweepScheduler(
        _opener(fake_stores, entered), 3600, clock=lambda: NOW,
    )

    await scheduler.start()
    assert scheduler.state is SchedulerState.RUNNING
    await asyncio.wait_for(entered.wait(), timeout=1)
    await scheduler.stop()

    assert scheduler.state is SchedulerState.STOPPED
    assert scheduler.ticks_completed == 1
    assert listing.hidden is True


async def test_stop_waits_for_running_batch(fake_stores):
    entered, gate = asyncio.Event(), asyncio.Event()
    scheduler = ExpirationSweepScheduler(
        _opener(fake_stores, entered, gate), 3600, clock=lambda: NOW,
    )
    await scheduler.start()
    await asyncio.wait_for(entered.wait(), timeout=1)

    stopping = asyncio.create_task(scheduler.stop())
    await asyncio.sleep(0)
    assert not stopping.done()
    gate.set()
    await asyncio.wait_for(stopping, timeout=1)

    assert scheduler.ticks_completed == 1


async def test_start_and_stop_are_idempotent(fake_stores):
    scheduler = ExpirationSweepScheduler(_opener(fake_stores), 3600, clock=lambda: NOW)

    await scheduler.stop()
    await scheduler.start()
    await scheduler.start()
    await scheduler.stop()

    assert scheduler.state is SchedulerState.STOPPED

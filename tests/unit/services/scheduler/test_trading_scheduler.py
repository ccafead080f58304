# -*- coding: utf-8 -*-
"""Unit tests for TradingScheduler."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

from sorare_trading_bot.services.scheduler import TradingScheduler


class _FakeExecutor:
    """Counts cycle invocations; behaviour per cycle is pluggable."""

    def __init__(self) -> None:
        self.calls: dict[str, int] = {"standard": 0, "high_priority": 0, "counter_offer": 0}
        self.standard_behaviour: Any = None

    async def run_standard_cycle(self) -> list[Any]:
        self.calls["standard"] += 1
        if self.standard_behaviour is not None:
            await self.standard_behaviour()
        return []

    async def run_high_priority_cycle(self) -> list[Any]:
        self.calls["high_priority"] += 1
        return []

    async def run_counter_offer_cycle(self) -> list[Any]:
        self.calls["counter_offer"] += 1
        return []


def _settings(*, interval: float = 0.02, grace: float = 1.0) -> Any:
    """Build minimal settings object expected by the scheduler."""
    return SimpleNamespace(
        trading=SimpleNamespace(
            standard_scan_interval_seconds=interval,
            high_priority_scan_interval_seconds=interval,
            counter_offer_interval_seconds=interval,
            standard_scan_initial_delay_seconds=0.0,
            high_priority_scan_initial_delay_seconds=0.0,
            counter_offer_initial_delay_seconds=10.0,
            shutdown_grace_seconds=grace,
        )
    )


def test_jobs_follow_settings() -> None:
    scheduler = TradingScheduler(_FakeExecutor(), _settings(interval=3.0))

    assert [(j.name, j.interval_seconds) for j in scheduler.jobs] == [
        ("standard", 3.0),
        ("high_priority", 3.0),
        ("counter_offer", 3.0),
    ]
    assert scheduler.is_running is False


async def test_cycles_fire_repeatedly_after_initial_delay() -> None:
    executor = _FakeExecutor()
    scheduler = TradingScheduler(executor, _settings())

    scheduler.start()
    await asyncio.sleep(0.1)
    await scheduler.stop()

    assert executor.calls["standard"] >= 2
    assert executor.calls["high_priority"] >= 2
    assert executor.calls["counter_offer"] == 0
    assert scheduler.is_running is False


async def test_failing_cycle_does_not_stop_the_timer() -> None:
    executor = _FakeExecutor()

    async def _boom() -> None:
        raise RuntimeError("marketplace down")

    executor.standard_behaviour = _boom
    scheduler = TradingScheduler(executor, _settings())

    scheduler.start()
    await asyncio.sleep(0.1)
    await scheduler.stop()

    assert executor.calls["standard"] >= 2


async def test_stop_waits_for_in_flight_cycle_within_grace() -> None:
    executor = _FakeExecutor()
    finished: list[bool] = []

    async def _slow() -> None:
        await asyncio.sleep(0.05)
        finished.append(True)

    executor.standard_behaviour = _slow
    scheduler = TradingScheduler(executor, _settings(interval=10.0))

    scheduler.start()
    await asyncio.sleep(0.01)
    assert scheduler.in_flight >= 1
    await scheduler.stop(grace_seconds=1.0)

    assert finished == [True]
    assert scheduler.in_flight == 0


async def test_stop_cancels_cycles_exceeding_grace() -> None:
    executor = _FakeExecutor()
    cancelled: list[bool] = []

    async def _stuck() -> None:
        try:
            await asyncio.sleep(60)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    executor.standard_behaviour = _stuck
    scheduler = TradingScheduler(executor, _settings(interval=10.0, grace=0.05))

    scheduler.start()
    await asyncio.sleep(0.01)
    await scheduler.stop()

    assert cancelled == [True]
    assert scheduler.in_flight == 0

# -*- coding: utf-8 -*-
"""TradingScheduler: runs the three trading cycles at fixed rates until stopped."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

import structlog

if TYPE_CHECKING:
    from sorare_trading_bot.config import Settings
    from sorare_trading_bot.services.trading import TradeExecutor


@dataclass(frozen=True)
class ScheduledJob:
    name: str
    interval_seconds: float
    initial_delay_seconds: float
    cycle: Callable[[], Awaitable[Any]]


class TradingScheduler:
    """Fires each cycle on its own fixed-rate timer.

    Every tick starts the cycle as a separate task and does not wait for it,
    so a slow cycle may overlap the next tick of the same or another cycle.
    A cycle that raises is logged and the timer keeps going.
    """

    def __init__(
        self,
        trade_executor: "TradeExecutor",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        tr = settings.trading
        self._settings = settings
        self._jobs = [
            ScheduledJob(
                "standard",
                tr.standard_scan_interval_seconds,
                tr.standard_scan_initial_delay_seconds,
                trade_executor.run_standard_cycle,
            ),
            ScheduledJob(
                "high_priority",
                tr.high_priority_scan_interval_seconds,
                tr.high_priority_scan_initial_delay_seconds,
                trade_executor.run_high_priority_cycle,
            ),
            ScheduledJob(
                "counter_offer",
                tr.counter_offer_interval_seconds,
                tr.counter_offer_initial_delay_seconds,
                trade_executor.run_counter_offer_cycle,
            ),
        ]
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._timers: list[asyncio.Task[None]] = []
        self._in_flight: set[asyncio.Task[None]] = set()

    @property
    def jobs(self) -> list[ScheduledJob]:
        return list(self._jobs)

    @property
    def is_running(self) -> bool:
        return bool(self._timers)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def start(self) -> None:
        """Start one timer task per job on the running loop."""
        if self._timers:
            return
        self._timers = [
            asyncio.create_task(self._timer(job), name=f"scheduler-{job.name}") for job in self._jobs
        ]
        self._logger.info(
            "scheduler_started",
            jobs={job.name: job.interval_seconds for job in self._jobs},
        )

    async def _timer(self, job: ScheduledJob) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time() + job.initial_delay_seconds
        while True:
            await asyncio.sleep(max(next_run - loop.time(), 0.0))
            self._spawn(job)
            next_run += job.interval_seconds

    def _spawn(self, job: ScheduledJob) -> None:
        task = asyncio.create_task(self._run_cycle(job), name=f"cycle-{job.name}")
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run_cycle(self, job: ScheduledJob) -> None:
        self._logger.debug("cycle_started", cycle=job.name)
        try:
            await job.cycle()
        except asyncio.CancelledError:
            self._logger.warning("cycle_cancelled", cycle=job.name)
            raise
        except Exception:
            self._logger.exception("cycle_failed", cycle=job.name)

    async def stop(self, grace_seconds: Optional[float] = None) -> None:
        """Stop the timers, give in-flight cycles grace_seconds to finish, then cancel them."""
        grace = self._settings.trading.shutdown_grace_seconds if grace_seconds is None else grace_seconds
        timers, self._timers = self._timers, []
        for t in timers:
            t.cancel()
        for t in timers:
            try:
                await t
            except asyncio.CancelledError:
                pass

        pending = set(self._in_flight)
        if pending:
            self._logger.info("scheduler_waiting_for_cycles", in_flight=len(pending), grace_seconds=grace)
            _, pending = await asyncio.wait(pending, timeout=grace)
        for t in pending:
            t.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            self._logger.warning("scheduler_cycles_cancelled", cancelled=len(pending))
        self._logger.info("scheduler_stopped")

# -*- coding: utf-8 -*-
"""
Entry point for the Sorare trading bot.

Orchestrates: logging, settings validation, container, emergency-stop watcher,
notifications, trading scheduler, shutdown (SIGINT/SIGTERM or CancelledError).
Cycles flow: scheduler -> TradeExecutor -> events -> TradeActivityNotifier -> NotificationService.

Run with: python -m sorare_trading_bot.main
"""
from __future__ import annotations

import asyncio
import signal
from typing import Any

import structlog

from sorare_trading_bot.DI import Container
from sorare_trading_bot.exceptions import MissingRequiredConfigError
from sorare_trading_bot.logging.config import configure_logging
from sorare_trading_bot.notifications.types import SYSTEM_STARTED, SYSTEM_STOPPED, NotificationMessage


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


async def _do_shutdown(container: Container, logger: Any) -> None:
    """Stop scheduling, let in-flight cycles finish, then stop the watcher and notifications."""
    await container.trading_scheduler().stop()
    await container.emergency_stop().stop_watcher()
    container.trade_activity_notifier().stop()
    notification_service = container.notification_service()
    notification_service.notify(
        NotificationMessage(event_type=SYSTEM_STOPPED, message="Sorare trading bot stopped", payload={})
    )
    await notification_service.shutdown()
    if container.config().storage.backend == "sqlite":
        container.sqlite_database().close()
    logger.info("main_shutdown_complete")


async def run(container: Container | None = None) -> None:
    container = container or Container()
    settings = container.config()
    configure_logging(settings)
    logger = structlog.get_logger("main")
    missing = settings.missing_required()
    if missing:
        logger.error("main_missing_required_config", missing=missing)
        raise MissingRequiredConfigError(*missing)

    emergency_stop = container.emergency_stop()
    spending_guard = container.spending_guard()
    rate_limiter = container.rate_limiter()
    scheduler = container.trading_scheduler()
    notification_service = container.notification_service()
    await notification_service.initialize()
    container.trade_activity_notifier().start()

    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)

    if emergency_stop.is_active():
        logger.critical("main_started_with_emergency_stop", reason=emergency_stop.reason)
    budget = spending_guard.budget_state()
    logger.info(
        "main_trading_started",
        storage_backend=settings.storage.backend,
        remaining_daily=budget.remaining_daily,
        remaining_weekly=budget.remaining_weekly,
        transactions_in_window=rate_limiter.count_in_window(),
    )
    notification_service.notify(
        NotificationMessage(
            event_type=SYSTEM_STARTED,
            message="Sorare trading bot started",
            payload={
                "storage": settings.storage.backend,
                "emergency_stop": emergency_stop.reason if emergency_stop.is_active() else "inactive",
                "remaining_daily_eth": str(budget.remaining_daily),
            },
        )
    )

    emergency_stop.start_watcher()
    scheduler.start()
    try:
        await shutdown_event.wait()
    finally:
        await _do_shutdown(container, logger)


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()

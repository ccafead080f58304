"""NotificationService: queue-backed fan-out to every notification channel."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from sorare_trading_bot.notifications.strategies import BaseNotificationStrategy
from sorare_trading_bot.notifications.types import NotificationMessage


@dataclass
class NotificationService:
    """Deliver trading notifications to every configured channel.

    notify() is synchronous and never raises into trading code. Messages are
    queued and a single worker hands each one to all channels concurrently;
    a failing channel is logged and does not affect the others. Messages that
    arrive before initialize(), after shutdown() or while the queue is full
    are dropped and counted in ``dropped``.
    """

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 1000
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    dropped: int = field(init=False, default=0)
    _queue: asyncio.Queue[NotificationMessage] | None = field(init=False, default=None)
    _worker: asyncio.Task[None] | None = field(init=False, default=None)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    async def initialize(self) -> None:
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.info("notification_init_no_notifiers")
            return
        self._queue = asyncio.Queue(maxsize=self.queue_size)
        self._worker = asyncio.create_task(self._deliver_forever(self._queue))
        self._logger.debug(
            "notification_init_complete",
            notification_notifiers_count=len(self.notifiers),
            notification_queue_size=self.queue_size,
        )

    async def shutdown(self) -> None:
        """Deliver what is already queued, then close every channel."""
        queue, worker = self._queue, self._worker
        self._queue, self._worker = None, None
        if queue is not None:
            queue.shutdown()
            await queue.join()
        if worker is not None:
            await worker
        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_shutdown_complete", notification_dropped=self.dropped)

    def notify(self, message: NotificationMessage) -> None:
        queue = self._queue
        if queue is None:
            if self.notifiers:
                self._drop("notification_service_not_running", message)
            return
        try:
            queue.put_nowait(message)
        except asyncio.QueueFull:
            self._drop("notification_queue_full_dropped", message)
        except asyncio.QueueShutDown:
            self._drop("notification_queue_closed_dropped", message)

    def _drop(self, event: str, message: NotificationMessage) -> None:
        self.dropped += 1
        self._logger.warning(event, notification_event_type=message.event_type)

    async def _deliver_forever(self, queue: asyncio.Queue[NotificationMessage]) -> None:
        while True:
            try:
                message = await queue.get()
            except asyncio.QueueShutDown:
                return
            try:
                await self._deliver(message)
            finally:
                queue.task_done()

    async def _deliver(self, message: NotificationMessage) -> None:
        results = await asyncio.gather(
            *(notifier.send_notification(message) for notifier in self.notifiers),
            return_exceptions=True,
        )
        for notifier, result in zip(self.notifiers, results):
            if isinstance(result, Exception):
                self._logger.error(
                    "notification_delivery_failed",
                    notifier=type(notifier).__name__,
                    notification_event_type=message.event_type,
                    error=str(result),
                    exc_info=result,
                )

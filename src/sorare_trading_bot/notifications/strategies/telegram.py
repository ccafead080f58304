# -*- coding: utf-8 -*-
"""Telegram notification strategy (python-telegram-bot, HTML parse mode)."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from telegram import Bot
from telegram.error import BadRequest, Forbidden, NetworkError, RetryAfter, TelegramError
from telegram.request import HTTPXRequest

from sorare_trading_bot.notifications.strategies.base import BaseNotificationStrategy
from sorare_trading_bot.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from sorare_trading_bot.config.config import Settings
    from sorare_trading_bot.notifications.types import NotificationStyler

MAX_BACKOFF_SECONDS = 60.0


class TelegramNotifier(BaseNotificationStrategy):
    """Send notifications to one Telegram chat.

    Sends are paced to messages_per_minute. Network errors and generic
    Telegram errors are retried with exponential backoff; RetryAfter waits
    the server-requested time; BadRequest and Forbidden drop the message.
    Only urgent messages (reconciliation gaps, special cards) ring the phone.
    """

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        bot: Optional[Bot] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        cfg = settings.telegram
        if not cfg.enabled or not cfg.api_key or not cfg.chat_id:
            raise ValueError("TelegramNotifier requires TELEGRAM__API_KEY and TELEGRAM__CHAT_ID.")
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._styler = styler
        self._token = str(cfg.api_key)
        self._chat_id = str(cfg.chat_id)
        self._bot: Optional[Bot] = bot
        self._running = False
        self._sent_at: deque[float] = deque()

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            return
        if self._bot is None:
            cfg = self.settings.telegram
            request = HTTPXRequest(
                connect_timeout=cfg.connect_timeout,
                read_timeout=cfg.read_timeout,
                write_timeout=cfg.write_timeout,
                pool_timeout=cfg.pool_timeout,
            )
            self._bot = Bot(token=self._token, request=request)
        self._running = True
        self._logger.debug("telegram_notifier_started")

    async def shutdown(self) -> None:
        self._bot = None
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running or self._bot is None:
            self._logger.warning("telegram_not_running_cannot_send", notification_event_type=message.event_type)
            return
        await self._send(self._bot, self._styler.render(message), silent=not message.urgent)

    def _backoff(self, attempt: int) -> float:
        base = self.settings.telegram.backoff_base_seconds
        return min(MAX_BACKOFF_SECONDS, base * (2 ** (attempt - 1)))

    async def _send(self, bot: Bot, text: str, *, silent: bool) -> None:
        max_retries = self.settings.telegram.max_retries
        await self._pace()
        for attempt in range(1, max_retries + 2):
            try:
                await bot.send_message(
                    chat_id=self._chat_id, text=text, parse_mode="HTML", disable_notification=silent
                )
                self._sent_at.append(time.monotonic())
                return
            except RetryAfter as exc:
                delay = exc.retry_after
                wait = delay.total_seconds() if hasattr(delay, "total_seconds") else float(delay)
                self._logger.warning("telegram_rate_limit_retry_after", retry_seconds=wait)
                await asyncio.sleep(wait)
            except (BadRequest, Forbidden) as exc:
                self._logger.error("telegram_fatal_error", error_type=type(exc).__name__, error_message=str(exc))
                return
            except (NetworkError, TelegramError) as exc:
                if attempt > max_retries:
                    break
                backoff = self._backoff(attempt)
                self._logger.warning(
                    "telegram_send_retry",
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_retries=max_retries,
                    backoff_seconds=backoff,
                )
                await asyncio.sleep(backoff)
        self._logger.error("telegram_max_retries_exceeded_message_dropped")

    async def _pace(self) -> None:
        limit = self.settings.telegram.messages_per_minute
        now = time.monotonic()
        while self._sent_at and self._sent_at[0] < now - 60:
            self._sent_at.popleft()
        if len(self._sent_at) >= limit:
            await asyncio.sleep(max(60 - (now - self._sent_at[0]), 0.0))

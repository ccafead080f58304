# -*- coding: utf-8 -*-
"""Unit tests for NotificationService and the console/Telegram channels."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest
from telegram.error import BadRequest, NetworkError

from sorare_trading_bot.config.config import ConsoleNotificationSettings, TelegramNotificationSettings
from sorare_trading_bot.notifications import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    EventNotificationStyler,
    NotificationMessage,
    NotificationService,
    TelegramNotifier,
)


class _RecordingNotifier(BaseNotificationStrategy):
    def __init__(self, fail: bool = False) -> None:
        super().__init__(SimpleNamespace())
        self.fail = fail
        self.sent: list[NotificationMessage] = []
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if self.fail:
            raise RuntimeError("channel down")
        self.sent.append(message)


def _message(event_type: str = "system_started") -> NotificationMessage:
    return NotificationMessage(event_type=event_type, message="hello", payload={"mode": "paper"})


async def test_messages_are_delivered_to_every_notifier_on_shutdown_drain() -> None:
    first, second = _RecordingNotifier(), _RecordingNotifier()
    service = NotificationService(notifiers=[first, second])
    await service.initialize()

    service.notify(_message())
    service.notify(_message("system_stopped"))
    await service.shutdown()

    assert [m.event_type for m in first.sent] == ["system_started", "system_stopped"]
    assert len(second.sent) == 2
    assert first.is_running is False


async def test_failing_notifier_does_not_block_others() -> None:
    broken, healthy = _RecordingNotifier(fail=True), _RecordingNotifier()
    service = NotificationService(notifiers=[broken, healthy])
    await service.initialize()

    service.notify(_message())
    await service.shutdown()

    assert len(healthy.sent) == 1


async def test_notify_before_initialize_and_after_shutdown_is_dropped() -> None:
    notifier = _RecordingNotifier()
    service = NotificationService(notifiers=[notifier])

    service.notify(_message())
    await service.initialize()
    await service.shutdown()
    service.notify(_message())

    assert notifier.sent == []
    assert service.dropped == 2


async def test_console_notifier_prints_plain_text(capsys: pytest.CaptureFixture[str]) -> None:
    settings = SimpleNamespace(console=ConsoleNotificationSettings(enabled=True))
    notifier = ConsoleNotifier(settings, EventNotificationStyler())
    await notifier.initialize()

    await notifier.send_notification(
        NotificationMessage(event_type="system_started", message="Bot & scheduler running")
    )

    out = capsys.readouterr().out
    assert "System Started" in out
    assert "Bot & scheduler running" in out
    assert "<b>" not in out


def _telegram_settings(**overrides: Any) -> Any:
    return SimpleNamespace(
        telegram=TelegramNotificationSettings(
            enabled=True,
            api_key="123:abc",
            chat_id="42",
            backoff_base_seconds=0.1,
            max_retries=overrides.pop("max_retries", 2),
            **overrides,
        )
    )


def test_telegram_requires_credentials() -> None:
    settings = SimpleNamespace(telegram=TelegramNotificationSettings(enabled=True, api_key=None, chat_id="42"))

    with pytest.raises(ValueError):
        TelegramNotifier(settings, EventNotificationStyler())


async def test_telegram_sends_html_to_configured_chat() -> None:
    bot = AsyncMock()
    notifier = TelegramNotifier(_telegram_settings(), EventNotificationStyler(), bot=bot)
    await notifier.initialize()

    await notifier.send_notification(_message())

    bot.send_message.assert_awaited_once()
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == "42"
    assert kwargs["parse_mode"] == "HTML"
    assert "System Started" in kwargs["text"]
    assert kwargs["disable_notification"] is True


async def test_telegram_rings_for_reconciliation_gaps() -> None:
    bot = AsyncMock()
    notifier = TelegramNotifier(_telegram_settings(), EventNotificationStyler(), bot=bot)
    await notifier.initialize()

    await notifier.send_notification(_message("reconciliation_gap"))

    assert bot.send_message.await_args.kwargs["disable_notification"] is False


async def test_telegram_retries_network_errors() -> None:
    bot = AsyncMock()
    bot.send_message.side_effect = [NetworkError("reset"), None]
    notifier = TelegramNotifier(_telegram_settings(), EventNotificationStyler(), bot=bot)
    await notifier.initialize()

    await notifier.send_notification(_message())

    assert bot.send_message.await_count == 2


async def test_telegram_drops_bad_request_without_retry() -> None:
    bot = AsyncMock()
    bot.send_message.side_effect = BadRequest("can't parse entities")
    notifier = TelegramNotifier(_telegram_settings(), EventNotificationStyler(), bot=bot)
    await notifier.initialize()

    await notifier.send_notification(_message())

    assert bot.send_message.await_count == 1

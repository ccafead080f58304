"""Notification strategies."""

from sorare_trading_bot.notifications.strategies.base import BaseNotificationStrategy
from sorare_trading_bot.notifications.strategies.console import ConsoleNotifier
from sorare_trading_bot.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]

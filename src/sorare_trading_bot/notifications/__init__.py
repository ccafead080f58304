"""Notification subsystem."""

from sorare_trading_bot.notifications.notification_manager import NotificationService
from sorare_trading_bot.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from sorare_trading_bot.notifications.stylers import EventNotificationStyler
from sorare_trading_bot.notifications.types import NotificationMessage, NotificationStyler

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "EventNotificationStyler",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
    "TelegramNotifier",
]

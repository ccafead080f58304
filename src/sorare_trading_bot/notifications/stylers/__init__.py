"""Notification stylers."""

from sorare_trading_bot.notifications.stylers.notification_styler import EventNotificationStyler

__all__ = ["EventNotificationStyler"]

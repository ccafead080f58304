"""Configuration subpackage."""

from sorare_trading_bot.config.config import (
    AppSettings,
    ConsoleNotificationSettings,
    EmergencySettings,
    LoggingSettings,
    MarketSettings,
    Settings,
    SpendingSettings,
    StorageSettings,
    TelegramNotificationSettings,
    TradingSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "ConsoleNotificationSettings",
    "EmergencySettings",
    "LoggingSettings",
    "MarketSettings",
    "Settings",
    "SpendingSettings",
    "StorageSettings",
    "TelegramNotificationSettings",
    "TradingSettings",
    "get_settings",
]

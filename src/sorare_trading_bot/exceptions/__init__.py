"""Exceptions subpackage."""

from sorare_trading_bot.exceptions.exceptions import (
    EmergencyStopDirectoryError,
    MarketClientError,
    MissingRequiredConfigError,
    SorareBotError,
)

__all__ = [
    "EmergencyStopDirectoryError",
    "MarketClientError",
    "MissingRequiredConfigError",
    "SorareBotError",
]

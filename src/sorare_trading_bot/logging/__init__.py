"""Logging setup (structlog + Logfire)."""

from sorare_trading_bot.logging.config import configure_logging

__all__ = ["configure_logging"]

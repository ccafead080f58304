"""Dependency injection."""

from sorare_trading_bot.DI.container import Container

__all__ = ["Container"]

"""Periodic execution of the trading cycles."""

from sorare_trading_bot.services.scheduler.trading_scheduler import ScheduledJob, TradingScheduler

__all__ = ["ScheduledJob", "TradingScheduler"]

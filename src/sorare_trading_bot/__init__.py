"""Sorare trading bot: marketplace scanning, guarded execution and safety controls."""

from sorare_trading_bot.clients import IMarketClient, PaperMarketClient
from sorare_trading_bot.config import get_settings
from sorare_trading_bot.DI import Container
from sorare_trading_bot.services import OperatorService, TradeExecutor, TradingScheduler

__version__ = "0.0.1"
__all__ = [
    "Container",
    "IMarketClient",
    "OperatorService",
    "PaperMarketClient",
    "TradeExecutor",
    "TradingScheduler",
    "get_settings",
]

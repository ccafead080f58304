"""Marketplace clients."""

from sorare_trading_bot.clients.market_client import IMarketClient
from sorare_trading_bot.clients.paper_market_client import PaperMarketClient

__all__ = ["IMarketClient", "PaperMarketClient"]

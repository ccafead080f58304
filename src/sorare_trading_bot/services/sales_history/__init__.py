"""Rolling sales history."""

from sorare_trading_bot.services.sales_history.sales_history_tracker import SalesHistoryTracker

__all__ = ["SalesHistoryTracker"]

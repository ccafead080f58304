# -*- coding: utf-8 -*-
"""Application services."""

from sorare_trading_bot.services.notifications import TradeActivityNotifier
from sorare_trading_bot.services.operator import BudgetStatus, OperatorService
from sorare_trading_bot.services.sales_history import SalesHistoryTracker
from sorare_trading_bot.services.scheduler import ScheduledJob, TradingScheduler
from sorare_trading_bot.services.strategy import PriceEvaluator
from sorare_trading_bot.services.trading import ExecutionResult, ExecutionStatus, TradeExecutor

__all__ = [
    "BudgetStatus",
    "ExecutionResult",
    "ExecutionStatus",
    "OperatorService",
    "PriceEvaluator",
    "SalesHistoryTracker",
    "ScheduledJob",
    "TradeActivityNotifier",
    "TradeExecutor",
    "TradingScheduler",
]

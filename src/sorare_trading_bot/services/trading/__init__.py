"""Trading cycles and guarded execution."""

from sorare_trading_bot.services.trading.trade_executor import (
    ExecutionResult,
    ExecutionStatus,
    TradeExecutor,
)

__all__ = ["ExecutionResult", "ExecutionStatus", "TradeExecutor"]

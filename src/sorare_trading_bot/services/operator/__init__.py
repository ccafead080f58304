"""Operator-facing operations."""

from sorare_trading_bot.services.operator.operator_service import BudgetStatus, OperatorService

__all__ = ["BudgetStatus", "OperatorService"]

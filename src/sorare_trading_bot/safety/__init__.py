"""Safety controls consulted before every marketplace transaction."""

from sorare_trading_bot.safety.emergency_stop import EmergencyStop
from sorare_trading_bot.safety.rate_limiter import RateLimiter
from sorare_trading_bot.safety.spending_guard import (
    ApprovalContext,
    ApprovalPolicy,
    SpendingDecision,
    SpendingGuard,
)

__all__ = [
    "ApprovalContext",
    "ApprovalPolicy",
    "EmergencyStop",
    "RateLimiter",
    "SpendingDecision",
    "SpendingGuard",
]

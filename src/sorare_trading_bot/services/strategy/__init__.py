"""Strategy rules (pure logic, no I/O)."""

from sorare_trading_bot.services.strategy.price_evaluator import (
    PRICE_QUANTUM,
    PriceEvaluator,
    quantize_price,
)

__all__ = ["PRICE_QUANTUM", "PriceEvaluator", "quantize_price"]

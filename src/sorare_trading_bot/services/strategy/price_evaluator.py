"""PriceEvaluator: pure buy/resale price rules (no I/O).

A listing is undervalued when its price is strictly below the reference
price minus the discount (default 15 %). Resale prices apply a markup and
are rounded to 6 decimals, half-up.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

PRICE_QUANTUM = Decimal("0.000001")


def quantize_price(value: Decimal) -> Decimal:
    """Round an ETH amount to 6 decimals, half-up."""
    return value.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


class PriceEvaluator:
    """Decides whether a price is a bargain against a reference (floor or rolling average)."""

    def __init__(self, discount_fraction: Decimal = Decimal("0.15")) -> None:
        if not Decimal("0") <= discount_fraction < Decimal("1"):
            raise ValueError("discount_fraction must be in [0, 1)")
        self._discount = discount_fraction

    @property
    def discount_fraction(self) -> Decimal:
        return self._discount

    def threshold(self, reference_price: Decimal) -> Decimal:
        """Return the price a listing must be strictly below to count as undervalued."""
        if reference_price <= 0:
            raise ValueError("reference_price must be positive")
        return reference_price * (Decimal("1") - self._discount)

    def is_undervalued(self, price: Decimal, reference_price: Decimal) -> bool:
        """Return True iff price < reference_price * (1 - discount).

        Raises:
            ValueError: If price or reference_price is not positive.
        """
        if price <= 0:
            raise ValueError("price must be positive")
        return price < self.threshold(reference_price)

    @staticmethod
    def markup_price(price: Decimal, markup: Decimal) -> Decimal:
        """Return the resale price price * markup (6 decimals, half-up)."""
        if price <= 0 or markup <= 0:
            raise ValueError("price and markup must be positive")
        return quantize_price(price * markup)

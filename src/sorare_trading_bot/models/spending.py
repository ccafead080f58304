# -*- coding: utf-8 -*-
"""Spending ledger entry and the derived budget view."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class SpendRecord:
    """ETH spent by one executed transaction (input of the daily/weekly windows)."""

    id: str
    amount: Decimal
    description: str
    recorded_at: datetime

    @classmethod
    def create(
        cls,
        id: str,
        amount: Decimal,
        description: str = "",
        *,
        recorded_at: datetime | None = None,
    ) -> SpendRecord:
        if amount <= 0:
            raise ValueError("amount must be positive")
        return cls(
            id=id,
            amount=amount,
            description=description,
            recorded_at=recorded_at or datetime.now(UTC),
        )


@dataclass(frozen=True, slots=True)
class BudgetState:
    """Budget derived from the spending ledger at a point in time (never stored)."""

    daily_limit: Decimal
    weekly_limit: Decimal
    spent_daily: Decimal
    spent_weekly: Decimal

    @property
    def remaining_daily(self) -> Decimal:
        return max(self.daily_limit - self.spent_daily, Decimal("0"))

    @property
    def remaining_weekly(self) -> Decimal:
        return max(self.weekly_limit - self.spent_weekly, Decimal("0"))

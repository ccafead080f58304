"""SaleEntry: one observed sale price in the rolling history of an asset."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from sorare_trading_bot.models.listing import AssetKey


@dataclass(frozen=True, slots=True)
class SaleEntry:
    """Price point for (asset_id, variant); history keeps the most recent by recorded_at."""

    key: AssetKey
    price: Decimal
    recorded_at: datetime

    @classmethod
    def create(
        cls,
        key: AssetKey,
        price: Decimal,
        *,
        recorded_at: datetime | None = None,
    ) -> SaleEntry:
        if price <= 0:
            raise ValueError("price must be positive")
        return cls(key=key, price=price, recorded_at=recorded_at or datetime.now(UTC))

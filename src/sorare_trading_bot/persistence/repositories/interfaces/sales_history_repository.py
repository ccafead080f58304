# -*- coding: utf-8 -*-
"""Abstract interface for rolling sale-price history storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.models.sales_history import SaleEntry


class ISalesHistoryRepository(ABC):
    """Interface for SaleEntry storage keyed by (asset_id, variant)."""

    @abstractmethod
    def add(self, entry: SaleEntry) -> None:
        """Insert an entry."""
        ...

    @abstractmethod
    def list_recent(self, key: AssetKey, limit: int | None = None) -> list[SaleEntry]:
        """Return entries for key ordered by recorded_at, newest first (ties: last inserted first)."""
        ...

    @abstractmethod
    def prune(self, key: AssetKey, keep: int) -> int:
        """Delete all but the keep most recent entries for key. Return the number deleted."""
        ...

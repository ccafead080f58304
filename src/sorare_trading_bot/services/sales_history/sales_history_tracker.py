# -*- coding: utf-8 -*-
"""Rolling sale-price history of the high-priority assets."""

from __future__ import annotations

import threading
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional

import structlog

from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.models.sales_history import SaleEntry
from sorare_trading_bot.persistence.repositories.interfaces.sales_history_repository import (
    ISalesHistoryRepository,
)
from sorare_trading_bot.services.strategy.price_evaluator import quantize_price
from sorare_trading_bot.utils.clock import Clock, utc_now


class SalesHistoryTracker:
    """Keeps the most recent `window` sale prices per (asset_id, variant).

    Recency is by recorded_at, not insertion order: a backfilled entry older
    than every retained one is evicted as soon as it is recorded.
    """

    def __init__(
        self,
        repository: ISalesHistoryRepository,
        *,
        window: int = 5,
        clock: Clock = utc_now,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        if window < 1:
            raise ValueError("window must be >= 1")
        self._repo = repository
        self._window = window
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = threading.Lock()

    @property
    def window(self) -> int:
        return self._window

    def record_sale(self, key: AssetKey, price: Decimal, recorded_at: Optional[datetime] = None) -> SaleEntry:
        """Append a sale price and evict everything beyond the window."""
        entry = SaleEntry.create(key, price, recorded_at=recorded_at or self._clock())
        with self._lock:
            self._repo.add(entry)
            evicted = self._repo.prune(key, self._window)
        self._logger.info("sale_recorded", asset=str(key), price=price, evicted=evicted)
        return entry

    def average_of_last(self, key: AssetKey, n: int) -> Optional[Decimal]:
        """Mean of the n most recent prices (6 decimals, half-up), or None with fewer than n entries.

        Raises:
            ValueError: If n is outside 1..window.
        """
        if not 1 <= n <= self._window:
            raise ValueError(f"n must be between 1 and {self._window}")
        with self._lock:
            entries = self._repo.list_recent(key, limit=n)
        if len(entries) < n:
            self._logger.debug("sales_history_insufficient", asset=str(key), available=len(entries), needed=n)
            return None
        total = sum((e.price for e in entries), Decimal("0"))
        return quantize_price(total / Decimal(n))

    def history(self, key: AssetKey) -> list[SaleEntry]:
        """Retained entries for key, newest first."""
        with self._lock:
            return self._repo.list_recent(key, limit=self._window)

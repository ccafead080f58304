"""In-memory sale-price history (keyed by AssetKey)."""

from __future__ import annotations

from itertools import count

from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.models.sales_history import SaleEntry
from sorare_trading_bot.persistence.repositories.interfaces.sales_history_repository import (
    ISalesHistoryRepository,
)


class InMemorySalesHistoryRepository(ISalesHistoryRepository):
    """In-memory implementation of ISalesHistoryRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[AssetKey, list[tuple[int, SaleEntry]]] = {}
        self._seq = count()

    def add(self, entry: SaleEntry) -> None:
        self._store.setdefault(entry.key, []).append((next(self._seq), entry))

    def list_recent(self, key: AssetKey, limit: int | None = None) -> list[SaleEntry]:
        ordered = sorted(
            self._store.get(key, []),
            key=lambda item: (item[1].recorded_at, item[0]),
            reverse=True,
        )
        entries = [entry for _, entry in ordered]
        return entries if limit is None else entries[:limit]

    def prune(self, key: AssetKey, keep: int) -> int:
        items = self._store.get(key, [])
        if len(items) <= keep:
            return 0
        ordered = sorted(items, key=lambda item: (item[1].recorded_at, item[0]), reverse=True)
        self._store[key] = ordered[:keep]
        return len(ordered) - keep

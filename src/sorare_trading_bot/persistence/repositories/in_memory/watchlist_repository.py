"""In-memory watchlist (keyed by AssetKey)."""

from __future__ import annotations

from typing import Optional

from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.models.watched_asset import WatchedAsset
from sorare_trading_bot.persistence.repositories.interfaces.watchlist_repository import (
    IWatchlistRepository,
)


class InMemoryWatchlistRepository(IWatchlistRepository):
    """In-memory implementation of IWatchlistRepository."""

    def __init__(self) -> None:
        self._store: dict[AssetKey, WatchedAsset] = {}

    def add(self, asset: WatchedAsset) -> bool:
        if asset.key in self._store:
            return False
        self._store[asset.key] = asset
        return True

    def remove(self, asset_id: str, variant: Optional[str] = None) -> int:
        asset_id = asset_id.strip()
        normalized = variant.strip().lower() if variant else None
        doomed = [
            k
            for k in self._store
            if k.asset_id == asset_id and (normalized is None or k.variant == normalized)
        ]
        for k in doomed:
            del self._store[k]
        return len(doomed)

    def list_all(self) -> list[WatchedAsset]:
        return sorted(self._store.values(), key=lambda a: a.added_at)

# -*- coding: utf-8 -*-
"""Abstract interface for the market-scan watchlist."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from sorare_trading_bot.models.watched_asset import WatchedAsset


class IWatchlistRepository(ABC):
    """Interface for persisting WatchedAsset entries (unique per asset_id + variant)."""

    @abstractmethod
    def add(self, asset: WatchedAsset) -> bool:
        """Insert the asset. Return False if (asset_id, variant) is already watched."""
        ...

    @abstractmethod
    def remove(self, asset_id: str, variant: Optional[str] = None) -> int:
        """Remove the asset (all variants when variant is None). Return rows removed."""
        ...

    @abstractmethod
    def list_all(self) -> list[WatchedAsset]:
        """Return watched assets ordered by added_at (oldest first)."""
        ...

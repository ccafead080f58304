# -*- coding: utf-8 -*-
"""Abstract interface for the high-priority asset list."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sorare_trading_bot.models.listing import AssetKey


class IHighPriorityRepository(ABC):
    """Interface for the (asset_id, variant) pairs traded with the rolling-average rule."""

    @abstractmethod
    def add(self, key: AssetKey) -> bool:
        """Add key. Return False if key.asset_id is already high-priority (in any variant)."""
        ...

    @abstractmethod
    def remove(self, asset_id: str) -> bool:
        """Remove every entry for asset_id. Return False if none existed."""
        ...

    @abstractmethod
    def list_all(self) -> list[AssetKey]:
        ...

    def contains(self, key: AssetKey) -> bool:
        return key in self.list_all()

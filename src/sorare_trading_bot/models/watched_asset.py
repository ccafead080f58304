"""WatchedAsset: an (asset_id, variant) pair on the market-scan watchlist."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from sorare_trading_bot.models.listing import AssetKey


@dataclass(frozen=True, slots=True)
class WatchedAsset:
    asset_id: str
    variant: str
    display_name: str
    added_at: datetime

    @classmethod
    def create(
        cls,
        asset_id: str,
        variant: str,
        display_name: str = "",
        *,
        added_at: datetime | None = None,
    ) -> WatchedAsset:
        key = AssetKey.create(asset_id, variant)
        return cls(
            asset_id=key.asset_id,
            variant=key.variant,
            display_name=display_name.strip(),
            added_at=added_at or datetime.now(UTC),
        )

    @property
    def key(self) -> AssetKey:
        return AssetKey(self.asset_id, self.variant)

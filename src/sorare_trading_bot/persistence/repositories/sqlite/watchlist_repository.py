"""SQLite-backed watchlist."""

from __future__ import annotations

import sqlite3
from typing import Optional

from sorare_trading_bot.models.watched_asset import WatchedAsset
from sorare_trading_bot.persistence.repositories.interfaces.watchlist_repository import (
    IWatchlistRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.database import (
    SqliteDatabase,
    from_db_timestamp,
    to_db_timestamp,
)


class SqliteWatchlistRepository(IWatchlistRepository):
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def add(self, asset: WatchedAsset) -> bool:
        try:
            with self._db.transaction() as conn:
                conn.execute(
                    "INSERT INTO watchlist (asset_id, variant, display_name, added_at) VALUES (?, ?, ?, ?)",
                    (asset.asset_id, asset.variant, asset.display_name, to_db_timestamp(asset.added_at)),
                )
        except sqlite3.IntegrityError:
            return False
        return True

    def remove(self, asset_id: str, variant: Optional[str] = None) -> int:
        with self._db.transaction() as conn:
            if variant:
                cursor = conn.execute(
                    "DELETE FROM watchlist WHERE asset_id = ? AND variant = ?",
                    (asset_id.strip(), variant.strip().lower()),
                )
            else:
                cursor = conn.execute("DELETE FROM watchlist WHERE asset_id = ?", (asset_id.strip(),))
            return cursor.rowcount

    def list_all(self) -> list[WatchedAsset]:
        rows = self._db.fetch_all(
            "SELECT asset_id, variant, display_name, added_at FROM watchlist ORDER BY added_at, rowid"
        )
        return [
            WatchedAsset(
                asset_id=row["asset_id"],
                variant=row["variant"],
                display_name=row["display_name"],
                added_at=from_db_timestamp(row["added_at"]),
            )
            for row in rows
        ]

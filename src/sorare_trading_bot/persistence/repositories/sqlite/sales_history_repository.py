"""SQLite-backed sale-price history."""

from __future__ import annotations

from decimal import Decimal

from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.models.sales_history import SaleEntry
from sorare_trading_bot.persistence.repositories.interfaces.sales_history_repository import (
    ISalesHistoryRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.database import (
    SqliteDatabase,
    from_db_timestamp,
    to_db_timestamp,
)


class SqliteSalesHistoryRepository(ISalesHistoryRepository):
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def add(self, entry: SaleEntry) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                "INSERT INTO sales_history (asset_id, variant, price, recorded_at) VALUES (?, ?, ?, ?)",
                (
                    entry.key.asset_id,
                    entry.key.variant,
                    str(entry.price),
                    to_db_timestamp(entry.recorded_at),
                ),
            )

    def list_recent(self, key: AssetKey, limit: int | None = None) -> list[SaleEntry]:
        sql = (
            "SELECT price, recorded_at FROM sales_history WHERE asset_id = ? AND variant = ? "
            "ORDER BY recorded_at DESC, id DESC"
        )
        params: tuple = (key.asset_id, key.variant)
        if limit is not None:
            sql += " LIMIT ?"
            params += (max(limit, 0),)
        return [
            SaleEntry(
                key=key,
                price=Decimal(row["price"]),
                recorded_at=from_db_timestamp(row["recorded_at"]),
            )
            for row in self._db.fetch_all(sql, params)
        ]

    def prune(self, key: AssetKey, keep: int) -> int:
        with self._db.transaction() as conn:
            cursor = conn.execute(
                """
                DELETE FROM sales_history
                WHERE asset_id = ? AND variant = ? AND id NOT IN (
                    SELECT id FROM sales_history
                    WHERE asset_id = ? AND variant = ?
                    ORDER BY recorded_at DESC, id DESC
                    LIMIT ?
                )
                """,
                (key.asset_id, key.variant, key.asset_id, key.variant, max(keep, 0)),
            )
            return cursor.rowcount

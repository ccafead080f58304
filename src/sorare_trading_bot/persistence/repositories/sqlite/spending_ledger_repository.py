"""SQLite-backed spending ledger."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sorare_trading_bot.models.spending import SpendRecord
from sorare_trading_bot.persistence.repositories.interfaces.spending_ledger_repository import (
    ISpendingLedgerRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.database import (
    SqliteDatabase,
    from_db_timestamp,
    to_db_timestamp,
)


class SqliteSpendingLedgerRepository(ISpendingLedgerRepository):
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def append(self, record: SpendRecord) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                "INSERT INTO spend_ledger (id, amount, description, recorded_at) VALUES (?, ?, ?, ?)",
                (
                    record.id,
                    str(record.amount),
                    record.description,
                    to_db_timestamp(record.recorded_at),
                ),
            )

    def list_since(self, since: datetime) -> list[SpendRecord]:
        rows = self._db.fetch_all(
            "SELECT id, amount, description, recorded_at FROM spend_ledger "
            "WHERE recorded_at > ? ORDER BY recorded_at, rowid",
            (to_db_timestamp(since),),
        )
        return [
            SpendRecord(
                id=row["id"],
                amount=Decimal(row["amount"]),
                description=row["description"],
                recorded_at=from_db_timestamp(row["recorded_at"]),
            )
            for row in rows
        ]

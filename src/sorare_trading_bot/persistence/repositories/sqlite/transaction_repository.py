"""SQLite-backed transaction log."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sorare_trading_bot.models.transaction_record import TransactionKind, TransactionRecord
from sorare_trading_bot.persistence.repositories.interfaces.transaction_repository import (
    ITransactionRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.database import (
    SqliteDatabase,
    from_db_timestamp,
    to_db_timestamp,
)

_COLUMNS = "id, card_id, kind, amount, reference, recorded_at"


def _to_record(row: sqlite3.Row) -> TransactionRecord:
    return TransactionRecord(
        id=row["id"],
        card_id=row["card_id"],
        kind=TransactionKind(row["kind"]),
        amount=Decimal(row["amount"]),
        reference=row["reference"],
        recorded_at=from_db_timestamp(row["recorded_at"]),
    )


class SqliteTransactionRepository(ITransactionRepository):
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def append(self, record: TransactionRecord) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                f"INSERT INTO transactions ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    record.id,
                    record.card_id,
                    record.kind.value,
                    str(record.amount),
                    record.reference,
                    to_db_timestamp(record.recorded_at),
                ),
            )

    def list_recent(self, limit: int = 10) -> list[TransactionRecord]:
        rows = self._db.fetch_all(
            f"SELECT {_COLUMNS} FROM transactions ORDER BY recorded_at DESC, rowid DESC LIMIT ?",
            (max(limit, 0),),
        )
        return [_to_record(r) for r in rows]

    def list_since(
        self,
        since: datetime,
        kinds: Optional[set[TransactionKind]] = None,
    ) -> list[TransactionRecord]:
        rows = self._db.fetch_all(
            f"SELECT {_COLUMNS} FROM transactions WHERE recorded_at > ? ORDER BY recorded_at, rowid",
            (to_db_timestamp(since),),
        )
        records = [_to_record(r) for r in rows]
        if kinds is not None:
            records = [r for r in records if r.kind in kinds]
        return records

    def last_for_card(self, card_id: str, kind: TransactionKind) -> Optional[TransactionRecord]:
        row = self._db.fetch_one(
            f"SELECT {_COLUMNS} FROM transactions WHERE card_id = ? AND kind = ? "
            "ORDER BY recorded_at DESC, rowid DESC LIMIT 1",
            (card_id, kind.value),
        )
        return _to_record(row) if row is not None else None

# -*- coding: utf-8 -*-
"""Shared SQLite connection and schema for the persistent repositories.

Amounts are stored as TEXT (exact Decimal round-trip) and timestamps as
ISO-8601 UTC strings with microseconds, so lexicographic order matches
chronological order.
"""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import structlog

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        card_id TEXT NOT NULL,
        kind TEXT NOT NULL,
        amount TEXT NOT NULL,
        reference TEXT NOT NULL,
        recorded_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_transactions_recorded_at ON transactions (recorded_at)",
    "CREATE INDEX IF NOT EXISTS ix_transactions_card ON transactions (card_id, kind)",
    """
    CREATE TABLE IF NOT EXISTS sales_history (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        asset_id TEXT NOT NULL,
        variant TEXT NOT NULL,
        price TEXT NOT NULL,
        recorded_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_sales_history_key ON sales_history (asset_id, variant, recorded_at)",
    """
    CREATE TABLE IF NOT EXISTS spend_ledger (
        id TEXT PRIMARY KEY,
        amount TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        recorded_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_spend_ledger_recorded_at ON spend_ledger (recorded_at)",
    """
    CREATE TABLE IF NOT EXISTS watchlist (
        asset_id TEXT NOT NULL,
        variant TEXT NOT NULL,
        display_name TEXT NOT NULL DEFAULT '',
        added_at TEXT NOT NULL,
        PRIMARY KEY (asset_id, variant)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS favorite_serials (
        serial INTEGER NOT NULL,
        variant TEXT NOT NULL DEFAULT '',
        PRIMARY KEY (serial, variant)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS preferences (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,
)


def to_db_timestamp(value: datetime) -> str:
    """Serialize a datetime as UTC ISO-8601 with microseconds (naive values are taken as UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_db_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class SqliteDatabase:
    """One connection shared by every repository, serialized by a lock.

    Each write commits immediately; the bot writes a handful of rows per cycle.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._path = str(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = threading.RLock()
        if self._path != ":memory:":
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self._path, timeout=30, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        if self._path != ":memory:":
            self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA synchronous=NORMAL")
        self._init_schema()
        self._logger.info("sqlite_database_opened", path=self._path)

    @property
    def path(self) -> str:
        return self._path

    def _init_schema(self) -> None:
        with self._lock, self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Yield the connection inside a committed-or-rolled-back transaction."""
        with self._lock, self._conn:
            yield self._conn

    def fetch_all(self, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, params).fetchall()

    def fetch_one(self, sql: str, params: tuple[Any, ...] = ()) -> Optional[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, params).fetchone()

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        self._logger.info("sqlite_database_closed", path=self._path)

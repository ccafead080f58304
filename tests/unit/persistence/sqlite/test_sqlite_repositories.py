# -*- coding: utf-8 -*-
"""Unit tests for the SQLite repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.models.sales_history import SaleEntry
from sorare_trading_bot.models.spending import SpendRecord
from sorare_trading_bot.models.transaction_record import TransactionKind, TransactionRecord
from sorare_trading_bot.models.watched_asset import WatchedAsset
from sorare_trading_bot.persistence.repositories.sqlite import (
    SqliteDatabase,
    SqlitePreferenceRepository,
    SqliteSalesHistoryRepository,
    SqliteSpendingLedgerRepository,
    SqliteTransactionRepository,
    SqliteWatchlistRepository,
)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "sorarebot.db"


@pytest.fixture
def database(db_path: Path) -> Iterator[SqliteDatabase]:
    db = SqliteDatabase(db_path)
    yield db
    db.close()


def test_transactions_survive_reopen(
    db_path: Path,
    now_utc: datetime,
    D: Callable[[Any], Decimal],
) -> None:
    db = SqliteDatabase(db_path)
    repo = SqliteTransactionRepository(db)
    record = TransactionRecord.create(
        "card-1", TransactionKind.PURCHASE, D("0.840000"), "0xabc", recorded_at=now_utc
    )
    repo.append(record)
    db.close()

    reopened = SqliteDatabase(db_path)
    try:
        [loaded] = SqliteTransactionRepository(reopened).list_recent()
    finally:
        reopened.close()

    assert loaded == record
    assert str(loaded.amount) == "0.840000"


def test_transaction_queries(
    database: SqliteDatabase,
    now_utc: datetime,
    D: Callable[[Any], Decimal],
) -> None:
    repo = SqliteTransactionRepository(database)
    repo.append(
        TransactionRecord.create(
            "card-1", TransactionKind.PURCHASE, D("1"), "0x1", recorded_at=now_utc - timedelta(hours=2)
        )
    )
    repo.append(
        TransactionRecord.create(
            "card-1", TransactionKind.LISTING, D("1.05"), "listing-1", recorded_at=now_utc - timedelta(hours=2)
        )
    )
    repo.append(
        TransactionRecord.create("card-1", TransactionKind.PURCHASE, D("0.9"), "0x2", recorded_at=now_utc)
    )
    repo.append(TransactionRecord.create("card-2", TransactionKind.SALE, D("2"), "0x3", recorded_at=now_utc))

    assert [r.reference for r in repo.list_recent(2)] == ["0x3", "0x2"]
    assert repo.last_purchase_price("card-1") == D("0.9")
    assert repo.last_purchase_price("card-9") is None

    recent = repo.list_since(now_utc - timedelta(hours=1), {TransactionKind.PURCHASE, TransactionKind.SALE})
    assert [r.reference for r in recent] == ["0x2", "0x3"]
    assert len(repo.list_since(now_utc - timedelta(days=1))) == 4


def test_sales_history_prune_keeps_most_recent(
    database: SqliteDatabase,
    now_utc: datetime,
    D: Callable[[Any], Decimal],
) -> None:
    repo = SqliteSalesHistoryRepository(database)
    key = AssetKey.create("player", "rare")
    other = AssetKey.create("player", "limited")
    for i in range(7):
        repo.add(SaleEntry.create(key, D(f"1.{i}"), recorded_at=now_utc + timedelta(minutes=i)))
    repo.add(SaleEntry.create(other, D("0.1"), recorded_at=now_utc))

    deleted = repo.prune(key, 5)

    assert deleted == 2
    assert [e.price for e in repo.list_recent(key)] == [D("1.6"), D("1.5"), D("1.4"), D("1.3"), D("1.2")]
    assert [e.price for e in repo.list_recent(key, limit=2)] == [D("1.6"), D("1.5")]
    assert len(repo.list_recent(other)) == 1


def test_spending_ledger_list_since_is_exclusive(
    database: SqliteDatabase,
    now_utc: datetime,
    D: Callable[[Any], Decimal],
) -> None:
    repo = SqliteSpendingLedgerRepository(database)
    repo.append(SpendRecord.create("a", D("0.1"), recorded_at=now_utc - timedelta(days=1)))
    repo.append(SpendRecord.create("b", D("0.2"), "buy card-2", recorded_at=now_utc))

    records = repo.list_since(now_utc - timedelta(days=1))

    assert [(r.id, r.amount, r.description) for r in records] == [("b", D("0.2"), "buy card-2")]


def test_watchlist_uniqueness_and_removal(database: SqliteDatabase, now_utc: datetime) -> None:
    repo = SqliteWatchlistRepository(database)

    assert repo.add(WatchedAsset.create("player", "Limited", "Player", added_at=now_utc)) is True
    assert repo.add(WatchedAsset.create("player", "limited", added_at=now_utc)) is False
    assert repo.add(WatchedAsset.create("player", "rare", added_at=now_utc + timedelta(seconds=1))) is True

    assert [a.variant for a in repo.list_all()] == ["limited", "rare"]
    assert repo.remove("player", "RARE") == 1
    assert repo.remove("player") == 1
    assert repo.list_all() == []


def test_preferences(database: SqliteDatabase, D: Callable[[Any], Decimal]) -> None:
    repo = SqlitePreferenceRepository(database)

    assert repo.is_jersey_mint_enabled() is False
    assert repo.get_jersey_mint_max_price() is None

    repo.add_favorite_serial(7)
    repo.add_favorite_serial(7)
    repo.add_favorite_serial(1, "Unique")
    repo.set_jersey_mint_enabled(True)
    repo.set_jersey_mint_max_price(D("0.25"))

    assert repo.list_favorite_serials() == [(1, "unique"), (7, None)]
    assert repo.is_favorite_serial(7, "limited") is True
    assert repo.is_favorite_serial(1, "limited") is False
    assert repo.is_favorite_serial(1, "unique") is True
    assert repo.is_jersey_mint_enabled() is True
    assert repo.get_jersey_mint_max_price() == D("0.25")

    repo.set_jersey_mint_max_price(None)
    repo.remove_favorite_serial(7)
    assert repo.get_jersey_mint_max_price() is None
    assert repo.list_favorite_serials() == [(1, "unique")]


def test_in_memory_database_skips_files(tmp_path: Path) -> None:
    db = SqliteDatabase(":memory:")
    try:
        assert db.fetch_one("SELECT COUNT(*) AS n FROM transactions")["n"] == 0
    finally:
        db.close()

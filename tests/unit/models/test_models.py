# -*- coding: utf-8 -*-
"""Unit tests for domain models."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

import pytest

from sorare_trading_bot.models.listing import AssetKey, SerialInfo
from sorare_trading_bot.models.offer import Offer
from sorare_trading_bot.models.spending import BudgetState
from sorare_trading_bot.models.transaction_record import TransactionKind, TransactionRecord
from sorare_trading_bot.models.watched_asset import WatchedAsset


def test_asset_key_normalizes_and_rejects_blanks() -> None:
    assert AssetKey.create(" player ", "Super_Rare") == AssetKey("player", "super_rare")
    assert str(AssetKey("player", "rare")) == "player:rare"
    with pytest.raises(ValueError):
        AssetKey.create("player", " ")


def test_serial_info_jersey_mint() -> None:
    assert SerialInfo(10, 100, 10).is_jersey_mint is True
    assert SerialInfo(10, 100, 9).is_jersey_mint is False
    assert SerialInfo(10, 100).is_jersey_mint is False
    assert SerialInfo(7, 1000).label == "7/1000"


def test_offer_expiry_is_strict(now_utc: datetime, D: Callable[[Any], Decimal]) -> None:
    offer = Offer("o-1", "card-1", "buyer", D("1"), now_utc, now_utc + timedelta(hours=1))

    assert offer.is_expired(now_utc + timedelta(hours=1)) is False
    assert offer.is_expired(now_utc + timedelta(hours=1, microseconds=1)) is True


def test_transaction_record_validation(D: Callable[[Any], Decimal]) -> None:
    record = TransactionRecord.create(" card-1 ", TransactionKind.SALE, D("0.5"), "0xabc")

    assert record.card_id == "card-1"
    assert record.id
    with pytest.raises(ValueError):
        TransactionRecord.create("card-1", TransactionKind.SALE, D("0"), "0xabc")
    with pytest.raises(ValueError):
        TransactionRecord.create(" ", TransactionKind.SALE, D("1"), "0xabc")


def test_budget_state_remaining_never_negative(D: Callable[[Any], Decimal]) -> None:
    state = BudgetState(daily_limit=D("1"), weekly_limit=D("5"), spent_daily=D("1.2"), spent_weekly=D("1.2"))

    assert state.remaining_daily == D("0")
    assert state.remaining_weekly == D("3.8")


def test_watched_asset_key() -> None:
    asset = WatchedAsset.create("player", "LIMITED", " Player Name ")

    assert asset.key == AssetKey("player", "limited")
    assert asset.display_name == "Player Name"

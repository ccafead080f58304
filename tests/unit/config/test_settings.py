# -*- coding: utf-8 -*-
"""Unit tests for Settings."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from sorare_trading_bot.config.config import Settings, TradingSettings


@pytest.fixture(autouse=True)
def _clean_spending_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "SPENDING__MAX_SINGLE_TRANSACTION_ETH",
        "SPENDING__MAX_DAILY_ETH",
        "SPENDING__MAX_WEEKLY_ETH",
        "SPENDING__HIGH_VALUE_THRESHOLD_ETH",
    ):
        monkeypatch.delenv(key, raising=False)


def test_missing_required_lists_unset_spending_limits() -> None:
    settings = Settings.from_env(_env_file=None, spending={"max_daily_eth": "2"})

    assert settings.missing_required() == [
        "SPENDING__MAX_SINGLE_TRANSACTION_ETH",
        "SPENDING__MAX_WEEKLY_ETH",
        "SPENDING__HIGH_VALUE_THRESHOLD_ETH",
    ]


def test_complete_spending_config_passes() -> None:
    settings = Settings.from_env(
        _env_file=None,
        spending={
            "max_single_transaction_eth": "0.5",
            "max_daily_eth": "2",
            "max_weekly_eth": "5",
            "high_value_threshold_eth": "0.3",
        },
    )

    assert settings.missing_required() == []
    assert settings.spending.max_daily_eth == Decimal("2")


def test_nested_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRADING__DISCOUNT_FRACTION", "0.2")
    monkeypatch.setenv("SPENDING__MAX_DAILY_ETH", "3")

    settings = Settings(_env_file=None)

    assert settings.trading.discount_fraction == Decimal("0.2")
    assert settings.spending.max_daily_eth == Decimal("3")


def test_trading_defaults() -> None:
    trading = TradingSettings()

    assert trading.discount_fraction == Decimal("0.15")
    assert trading.markup_factor == Decimal("1.05")
    assert trading.counter_offer_min_fraction == Decimal("0.95")
    assert trading.history_window == 5


@pytest.mark.parametrize("interval", [60.0, 1200.0])
def test_high_priority_interval_is_bounded(interval: float) -> None:
    with pytest.raises(ValidationError):
        TradingSettings(high_priority_scan_interval_seconds=interval)

# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from sorare_trading_bot.clients.paper_market_client import PaperMarketClient
from sorare_trading_bot.config.config import MarketSettings, TradingSettings
from sorare_trading_bot.events.bus import create_event_bus
from sorare_trading_bot.models.listing import AssetKey, Listing, SerialInfo
from sorare_trading_bot.models.offer import Offer
from sorare_trading_bot.persistence.repositories.file import FileHighPriorityRepository
from sorare_trading_bot.persistence.repositories.in_memory import (
    InMemoryPreferenceRepository,
    InMemorySalesHistoryRepository,
    InMemorySpendingLedgerRepository,
    InMemoryTransactionRepository,
    InMemoryWatchlistRepository,
)
from sorare_trading_bot.safety import EmergencyStop, RateLimiter, SpendingGuard
from sorare_trading_bot.services.sales_history import SalesHistoryTracker
from sorare_trading_bot.services.strategy import PriceEvaluator
from sorare_trading_bot.services.trading import TradeExecutor


class FakeClock:
    """Settable time source: call it for now, advance() to move forward."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class FakeEventBus:
    """Minimal event bus fake for asserting dispatched events."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)

    def of_type(self, cls: type) -> list[Any]:
        return [e for e in self.dispatched if isinstance(e, cls)]


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def clock(now_utc: datetime) -> FakeClock:
    return FakeClock(now_utc)


@pytest.fixture
def asset_key() -> AssetKey:
    """Default watched asset used by tests."""
    return AssetKey.create("kylian-mbappe", "limited")


@pytest.fixture
def listing_factory(
    asset_key: AssetKey,
    now_utc: datetime,
    D: Callable[[Any], Decimal],
) -> Callable[..., Listing]:
    """Build a Listing with sensible defaults and easy overrides."""
    counter = iter(range(1, 10_000))

    def _build(**overrides: Any) -> Listing:
        serial = overrides.pop("serial", None)
        if isinstance(serial, tuple):
            serial = SerialInfo(*serial)
        return Listing(
            card_id=overrides.pop("card_id", f"card-{next(counter)}"),
            asset_id=overrides.pop("asset_id", asset_key.asset_id),
            variant=overrides.pop("variant", asset_key.variant),
            price=D(overrides.pop("price", "0.5")),
            seller=overrides.pop("seller", "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"),
            listed_at=overrides.pop("listed_at", now_utc),
            serial=serial,
        )

    return _build


@pytest.fixture
def offer_factory(now_utc: datetime, D: Callable[[Any], Decimal]) -> Callable[..., Offer]:
    """Build an Offer valid for one day from now_utc."""
    counter = iter(range(1, 10_000))

    def _build(**overrides: Any) -> Offer:
        return Offer(
            id=overrides.pop("id", f"offer-{next(counter)}"),
            card_id=overrides.pop("card_id", "card-1"),
            counterparty=overrides.pop("counterparty", "some-manager"),
            price=D(overrides.pop("price", "1")),
            created_at=overrides.pop("created_at", now_utc),
            expires_at=overrides.pop("expires_at", now_utc + timedelta(days=1)),
        )

    return _build


@pytest.fixture
def transaction_repo() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


@pytest.fixture
def sales_history_repo() -> InMemorySalesHistoryRepository:
    return InMemorySalesHistoryRepository()


@pytest.fixture
def spending_ledger() -> InMemorySpendingLedgerRepository:
    return InMemorySpendingLedgerRepository()


@pytest.fixture
def watchlist_repo() -> InMemoryWatchlistRepository:
    return InMemoryWatchlistRepository()


@pytest.fixture
def preference_repo() -> InMemoryPreferenceRepository:
    return InMemoryPreferenceRepository()


@pytest.fixture
def high_priority_repo(tmp_path: Path) -> FileHighPriorityRepository:
    """Fresh high-priority file per test."""
    return FileHighPriorityRepository(tmp_path / "config" / "high_priority_players.txt")


@pytest.fixture
def emergency_stop(tmp_path: Path, clock: FakeClock) -> EmergencyStop:
    return EmergencyStop(tmp_path / "emergency", poll_interval_seconds=0.01, clock=clock)


@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(5, clock=clock)


@pytest.fixture
def spending_guard(
    spending_ledger: InMemorySpendingLedgerRepository,
    clock: FakeClock,
    D: Callable[[Any], Decimal],
) -> SpendingGuard:
    return SpendingGuard(
        spending_ledger,
        max_single=D("2"),
        max_daily=D("5"),
        max_weekly=D("20"),
        high_value_threshold=D("1.5"),
        clock=clock,
    )


@pytest.fixture
def sales_history(sales_history_repo: InMemorySalesHistoryRepository, clock: FakeClock) -> SalesHistoryTracker:
    return SalesHistoryTracker(sales_history_repo, window=5, clock=clock)


@pytest.fixture
def market() -> PaperMarketClient:
    return PaperMarketClient(Decimal("100"))


@pytest.fixture
def trading_settings() -> Any:
    """Minimal settings object expected by the executor."""
    return SimpleNamespace(
        market=MarketSettings(request_timeout_seconds=5.0),
        trading=TradingSettings(),
    )


@pytest.fixture
def fake_event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def trade_executor(
    market: PaperMarketClient,
    sales_history: SalesHistoryTracker,
    rate_limiter: RateLimiter,
    spending_guard: SpendingGuard,
    emergency_stop: EmergencyStop,
    watchlist_repo: InMemoryWatchlistRepository,
    high_priority_repo: FileHighPriorityRepository,
    preference_repo: InMemoryPreferenceRepository,
    transaction_repo: InMemoryTransactionRepository,
    trading_settings: Any,
    fake_event_bus: FakeEventBus,
    clock: FakeClock,
) -> TradeExecutor:
    """Executor wired to the paper market and in-memory repositories."""
    return TradeExecutor(
        market,
        PriceEvaluator(trading_settings.trading.discount_fraction),
        sales_history,
        rate_limiter,
        spending_guard,
        emergency_stop,
        watchlist_repo,
        high_priority_repo,
        preference_repo,
        transaction_repo,
        trading_settings,
        fake_event_bus,
        clock=clock,
    )


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return create_event_bus("SorareTradingBotTests", history_size=200)

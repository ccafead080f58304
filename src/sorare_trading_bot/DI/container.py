# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from dependency_injector import containers, providers

from sorare_trading_bot.clients.market_client import IMarketClient
from sorare_trading_bot.clients.paper_market_client import PaperMarketClient
from sorare_trading_bot.config import Settings, get_settings
from sorare_trading_bot.events.bus import get_event_bus
from sorare_trading_bot.exceptions import MissingRequiredConfigError
from sorare_trading_bot.models.transaction_record import TransactionKind
from sorare_trading_bot.notifications.notification_manager import NotificationService
from sorare_trading_bot.notifications.strategies.base import BaseNotificationStrategy
from sorare_trading_bot.notifications.strategies.console import ConsoleNotifier
from sorare_trading_bot.notifications.strategies.telegram import TelegramNotifier
from sorare_trading_bot.notifications.stylers.notification_styler import EventNotificationStyler
from sorare_trading_bot.persistence.repositories.file import FileHighPriorityRepository
from sorare_trading_bot.persistence.repositories.in_memory import (
    InMemoryPreferenceRepository,
    InMemorySalesHistoryRepository,
    InMemorySpendingLedgerRepository,
    InMemoryTransactionRepository,
    InMemoryWatchlistRepository,
)
from sorare_trading_bot.persistence.repositories.interfaces import (
    ISpendingLedgerRepository,
    ITransactionRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite import (
    SqliteDatabase,
    SqlitePreferenceRepository,
    SqliteSalesHistoryRepository,
    SqliteSpendingLedgerRepository,
    SqliteTransactionRepository,
    SqliteWatchlistRepository,
)
from sorare_trading_bot.safety import (
    ApprovalPolicy,
    EmergencyStop,
    RateLimiter,
    SpendingGuard,
)
from sorare_trading_bot.services.notifications import TradeActivityNotifier
from sorare_trading_bot.services.operator import OperatorService
from sorare_trading_bot.services.sales_history import SalesHistoryTracker
from sorare_trading_bot.services.scheduler import TradingScheduler
from sorare_trading_bot.services.strategy import PriceEvaluator
from sorare_trading_bot.services.trading import TradeExecutor
from sorare_trading_bot.utils.clock import utc_now


def _build_notification_notifiers(
    settings: Settings,
    styler: EventNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


def _build_market_client(settings: Settings) -> IMarketClient:
    """Default marketplace: the in-memory paper client. Override market_client for live trading."""
    return PaperMarketClient(balance=settings.market.paper_balance_eth)


def _build_rate_limiter(settings: Settings, transactions: ITransactionRepository) -> RateLimiter:
    """Rate limiter seeded with the purchases and sales of the last hour from the durable log."""
    limiter = RateLimiter(settings.spending.max_transactions_per_hour)
    recent = transactions.list_since(
        utc_now() - timedelta(hours=1),
        kinds={TransactionKind.PURCHASE, TransactionKind.SALE},
    )
    limiter.preload(r.recorded_at for r in recent)
    return limiter


def _build_spending_guard(
    settings: Settings,
    ledger: ISpendingLedgerRepository,
    approval_policy: Optional[ApprovalPolicy],
) -> SpendingGuard:
    """Build the guard from settings.

    Raises:
        MissingRequiredConfigError: If a spending limit is unset.
    """
    sp = settings.spending
    max_single, max_daily = sp.max_single_transaction_eth, sp.max_daily_eth
    max_weekly, threshold = sp.max_weekly_eth, sp.high_value_threshold_eth
    if max_single is None or max_daily is None or max_weekly is None or threshold is None:
        raise MissingRequiredConfigError(*settings.missing_required())
    return SpendingGuard(
        ledger,
        max_single=max_single,
        max_daily=max_daily,
        max_weekly=max_weekly,
        high_value_threshold=threshold,
        approval_policy=approval_policy,
        allow_high_value_without_policy=sp.allow_high_value_without_policy,
    )


def _storage_backend(settings: Settings) -> str:
    return settings.storage.backend


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, storage, safety controls, executor and scheduler."""

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    # ----- storage -----

    storage_backend = providers.Callable(_storage_backend, config)

    sqlite_database = providers.Singleton(
        SqliteDatabase,
        path=config.provided.storage.db_path,
    )

    transaction_repository = providers.Selector(
        storage_backend,
        sqlite=providers.Singleton(SqliteTransactionRepository, database=sqlite_database),
        memory=providers.Singleton(InMemoryTransactionRepository),
    )

    sales_history_repository = providers.Selector(
        storage_backend,
        sqlite=providers.Singleton(SqliteSalesHistoryRepository, database=sqlite_database),
        memory=providers.Singleton(InMemorySalesHistoryRepository),
    )

    spending_ledger_repository = providers.Selector(
        storage_backend,
        sqlite=providers.Singleton(SqliteSpendingLedgerRepository, database=sqlite_database),
        memory=providers.Singleton(InMemorySpendingLedgerRepository),
    )

    watchlist_repository = providers.Selector(
        storage_backend,
        sqlite=providers.Singleton(SqliteWatchlistRepository, database=sqlite_database),
        memory=providers.Singleton(InMemoryWatchlistRepository),
    )

    preference_repository = providers.Selector(
        storage_backend,
        sqlite=providers.Singleton(SqlitePreferenceRepository, database=sqlite_database),
        memory=providers.Singleton(InMemoryPreferenceRepository),
    )

    high_priority_repository = providers.Singleton(
        FileHighPriorityRepository,
        path=config.provided.storage.high_priority_file,
    )

    # ----- marketplace -----

    market_client = providers.Singleton(_build_market_client, config)

    # ----- safety -----

    approval_policy = providers.Object(None)

    emergency_stop = providers.Singleton(
        EmergencyStop,
        directory=config.provided.emergency.directory,
        poll_interval_seconds=config.provided.emergency.poll_interval_seconds,
    )

    rate_limiter = providers.Singleton(_build_rate_limiter, config, transaction_repository)

    spending_guard = providers.Singleton(
        _build_spending_guard, config, spending_ledger_repository, approval_policy
    )

    # ----- trading -----

    price_evaluator = providers.Singleton(
        PriceEvaluator,
        discount_fraction=config.provided.trading.discount_fraction,
    )

    sales_history_tracker = providers.Singleton(
        SalesHistoryTracker,
        repository=sales_history_repository,
        window=config.provided.trading.history_window,
    )

    trade_executor = providers.Singleton(
        TradeExecutor,
        market_client=market_client,
        price_evaluator=price_evaluator,
        sales_history=sales_history_tracker,
        rate_limiter=rate_limiter,
        spending_guard=spending_guard,
        emergency_stop=emergency_stop,
        watchlist_repository=watchlist_repository,
        high_priority_repository=high_priority_repository,
        preference_repository=preference_repository,
        transaction_repository=transaction_repository,
        settings=config,
        event_bus=event_bus,
    )

    trading_scheduler = providers.Singleton(
        TradingScheduler,
        trade_executor=trade_executor,
        settings=config,
    )

    operator_service = providers.Singleton(
        OperatorService,
        watchlist_repository=watchlist_repository,
        high_priority_repository=high_priority_repository,
        preference_repository=preference_repository,
        transaction_repository=transaction_repository,
        sales_history=sales_history_tracker,
        emergency_stop=emergency_stop,
        spending_guard=spending_guard,
        rate_limiter=rate_limiter,
        market_client=market_client,
    )

    # ----- notifications -----

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    trade_activity_notifier = providers.Singleton(
        TradeActivityNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
    )

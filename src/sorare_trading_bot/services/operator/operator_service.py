# -*- coding: utf-8 -*-
"""OperatorService: the operations an operator shell (CLI, chat bot) can invoke.

No parsing happens here; arguments arrive typed and results are returned as
models for the caller to print.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from sorare_trading_bot.models.emergency_state import EmergencyState
from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.models.sales_history import SaleEntry
from sorare_trading_bot.models.spending import BudgetState
from sorare_trading_bot.models.transaction_record import TransactionRecord
from sorare_trading_bot.models.watched_asset import WatchedAsset

if TYPE_CHECKING:
    from sorare_trading_bot.clients.market_client import IMarketClient
    from sorare_trading_bot.persistence.repositories.interfaces import (
        IHighPriorityRepository,
        IPreferenceRepository,
        ITransactionRepository,
        IWatchlistRepository,
    )
    from sorare_trading_bot.safety import EmergencyStop, RateLimiter, SpendingGuard
    from sorare_trading_bot.services.sales_history import SalesHistoryTracker


@dataclass(frozen=True)
class BudgetStatus:
    budget: BudgetState
    transactions_in_window: int
    max_transactions_per_hour: int

    @property
    def transactions_remaining(self) -> int:
        return max(self.max_transactions_per_hour - self.transactions_in_window, 0)


class OperatorService:
    """Facade over the repositories and safety controls for operator commands."""

    def __init__(
        self,
        watchlist_repository: "IWatchlistRepository",
        high_priority_repository: "IHighPriorityRepository",
        preference_repository: "IPreferenceRepository",
        transaction_repository: "ITransactionRepository",
        sales_history: "SalesHistoryTracker",
        emergency_stop: "EmergencyStop",
        spending_guard: "SpendingGuard",
        rate_limiter: "RateLimiter",
        market_client: "IMarketClient",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._watchlist = watchlist_repository
        self._high_priority = high_priority_repository
        self._preferences = preference_repository
        self._transactions = transaction_repository
        self._history = sales_history
        self._emergency = emergency_stop
        self._spending = spending_guard
        self._rate_limiter = rate_limiter
        self._market = market_client
        self._logger = get_logger(logger_name or self.__class__.__name__)

    # ----- watchlist -----

    def add_to_watchlist(self, asset_id: str, variant: str, display_name: str = "") -> bool:
        """Watch (asset_id, variant). Return False if already watched."""
        asset = WatchedAsset.create(asset_id, variant, display_name)
        added = self._watchlist.add(asset)
        self._logger.info("watchlist_add", asset=str(asset.key), added=added)
        return added

    def remove_from_watchlist(self, asset_id: str, variant: Optional[str] = None) -> int:
        removed = self._watchlist.remove(asset_id, variant)
        self._logger.info("watchlist_remove", asset_id=asset_id, variant=variant, removed=removed)
        return removed

    def list_watchlist(self) -> list[WatchedAsset]:
        return self._watchlist.list_all()

    # ----- high priority -----

    def add_high_priority(self, asset_id: str, variant: str) -> bool:
        return self._high_priority.add(AssetKey.create(asset_id, variant))

    def remove_high_priority(self, asset_id: str) -> bool:
        return self._high_priority.remove(asset_id)

    def list_high_priority(self) -> list[AssetKey]:
        return self._high_priority.list_all()

    def high_priority_history(self, asset_id: str, variant: str) -> list[SaleEntry]:
        """Retained sale prices of the asset, newest first."""
        return self._history.history(AssetKey.create(asset_id, variant))

    # ----- special-card preferences -----

    def add_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        if serial < 1:
            raise ValueError("serial must be >= 1")
        self._preferences.add_favorite_serial(serial, variant)
        self._logger.info("favorite_serial_added", serial=serial, variant=variant)

    def remove_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        self._preferences.remove_favorite_serial(serial, variant)
        self._logger.info("favorite_serial_removed", serial=serial, variant=variant)

    def list_favorite_serials(self) -> list[tuple[int, Optional[str]]]:
        return self._preferences.list_favorite_serials()

    def set_jersey_mint_alerts(self, enabled: bool) -> None:
        self._preferences.set_jersey_mint_enabled(enabled)
        self._logger.info("jersey_mint_alerts_set", enabled=enabled)

    def set_jersey_mint_max_price(self, max_price: Optional[Decimal]) -> None:
        """Only alert on jersey mints at or below max_price (None removes the limit)."""
        if max_price is not None and max_price <= 0:
            raise ValueError("max_price must be positive")
        self._preferences.set_jersey_mint_max_price(max_price)
        self._logger.info("jersey_mint_max_price_set", max_price=max_price)

    # ----- emergency stop -----

    def emergency_status(self) -> EmergencyState:
        return self._emergency.state

    def trigger_emergency_stop(self, reason: str) -> None:
        reason = reason.strip()
        if not reason:
            raise ValueError("reason must be non-empty")
        self._emergency.trigger(f"Operator: {reason}")

    def clear_emergency_stop(self, force: bool = False) -> bool:
        return self._emergency.clear(force=force)

    # ----- reporting -----

    def recent_transactions(self, limit: int = 10) -> list[TransactionRecord]:
        return self._transactions.list_recent(limit)

    async def balance(self) -> Decimal:
        return await self._market.get_balance()

    def budget_status(self) -> BudgetStatus:
        return BudgetStatus(
            budget=self._spending.budget_state(),
            transactions_in_window=self._rate_limiter.count_in_window(),
            max_transactions_per_hour=self._rate_limiter.max_per_hour,
        )

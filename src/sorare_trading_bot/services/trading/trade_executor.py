# -*- coding: utf-8 -*-
"""TradeExecutor: the three trading cycles and the guarded execution sequence.

Every marketplace action passes, in order, the emergency stop, the hourly rate
limiter and (for purchases) the spending guard. A purchase is followed by an
immediate relisting at the markup price; if the relisting cannot happen the
purchase stays recorded and the gap is reported, never retried.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Literal, Optional, TypeVar
from uuid import uuid4

import structlog

from sorare_trading_bot.events.trading_events import (
    ReconciliationGapEvent,
    SpecialCardFoundEvent,
    TradeExecutedEvent,
)
from sorare_trading_bot.exceptions import MarketClientError
from sorare_trading_bot.models.listing import AssetKey, Listing
from sorare_trading_bot.models.offer import Offer
from sorare_trading_bot.models.transaction_record import TransactionKind, TransactionRecord
from sorare_trading_bot.services.strategy.price_evaluator import PriceEvaluator
from sorare_trading_bot.utils.clock import Clock, utc_now

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from sorare_trading_bot.clients.market_client import IMarketClient
    from sorare_trading_bot.config import Settings
    from sorare_trading_bot.persistence.repositories.interfaces import (
        IHighPriorityRepository,
        IPreferenceRepository,
        ITransactionRepository,
        IWatchlistRepository,
    )
    from sorare_trading_bot.safety import EmergencyStop, RateLimiter, SpendingGuard
    from sorare_trading_bot.services.sales_history import SalesHistoryTracker

T = TypeVar("T")
Strategy = Literal["standard", "high_priority"]


class ExecutionStatus(str, Enum):
    EXECUTED = "EXECUTED"
    SKIPPED_EMERGENCY_STOP = "SKIPPED_EMERGENCY_STOP"
    SKIPPED_RATE_LIMIT = "SKIPPED_RATE_LIMIT"
    REJECTED_SPENDING = "REJECTED_SPENDING"
    BUY_FAILED = "BUY_FAILED"
    RECONCILIATION_GAP = "RECONCILIATION_GAP"
    ACCEPT_FAILED = "ACCEPT_FAILED"


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one attempted purchase or offer acceptance."""

    status: ExecutionStatus
    card_id: Optional[str] = None
    price: Optional[Decimal] = None
    resale_price: Optional[Decimal] = None
    transaction_hash: Optional[str] = None
    listing_id: Optional[str] = None
    detail: Optional[str] = None

    @property
    def executed(self) -> bool:
        return self.status is ExecutionStatus.EXECUTED


class TradeExecutor:
    """Runs the standard scan, the high-priority scan and counter-offer reconciliation."""

    _event_bus: Optional["EventBus"] = None

    def __init__(
        self,
        market_client: "IMarketClient",
        price_evaluator: PriceEvaluator,
        sales_history: "SalesHistoryTracker",
        rate_limiter: "RateLimiter",
        spending_guard: "SpendingGuard",
        emergency_stop: "EmergencyStop",
        watchlist_repository: "IWatchlistRepository",
        high_priority_repository: "IHighPriorityRepository",
        preference_repository: "IPreferenceRepository",
        transaction_repository: "ITransactionRepository",
        settings: "Settings",
        event_bus: Optional[Any] = None,
        *,
        clock: Clock = utc_now,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the executor.

        Args:
            market_client: Marketplace queries and transactions.
            price_evaluator: Undervaluation rule and markup pricing.
            sales_history: Rolling sale prices of high-priority assets.
            rate_limiter: Hourly transaction window (purchases and sales).
            spending_guard: Per-transaction, daily and weekly ETH ceilings.
            emergency_stop: Kill switch consulted before every action.
            watchlist_repository: Assets scanned by the standard cycle.
            high_priority_repository: Assets scanned by the high-priority cycle.
            preference_repository: Favorite serials and jersey-mint alerts.
            transaction_repository: Append-only purchase/listing/sale log.
            settings: Application settings (trading, market).
            event_bus: Optional; if set, emits trade, gap and special-card events.
            clock: Time source (offer expiry).
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._market = market_client
        self._evaluator = price_evaluator
        self._history = sales_history
        self._rate_limiter = rate_limiter
        self._spending = spending_guard
        self._emergency = emergency_stop
        self._watchlist = watchlist_repository
        self._high_priority = high_priority_repository
        self._preferences = preference_repository
        self._transactions = transaction_repository
        self._settings = settings
        self._event_bus = event_bus
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    # ----- helpers -----

    async def _call(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        """Await one marketplace call under the configured timeout.

        Raises:
            MarketClientError: If the call fails or times out.
        """
        timeout = self._settings.market.request_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                return await fn()
        except TimeoutError as e:
            raise MarketClientError(
                f"{operation} timed out after {timeout}s", operation=operation, cause=e
            ) from e

    def _emit(self, event: Any) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(event)

    def _emergency_skip(self, cycle: str) -> bool:
        if self._emergency.is_active():
            self._logger.warning("cycle_skipped_emergency_stop", cycle=cycle, reason=self._emergency.reason)
            return True
        return False

    # ----- standard cycle -----

    async def run_standard_cycle(self) -> list[ExecutionResult]:
        """Scan watched assets (except high-priority ones) for listings well below floor."""
        if self._emergency_skip("standard"):
            return []
        high_priority = set(self._high_priority.list_all())
        watched = self._watchlist.list_all()
        self._logger.info("standard_cycle_started", watched=len(watched))

        results: list[ExecutionResult] = []
        for asset in watched:
            key = asset.key
            if key in high_priority:
                continue
            try:
                listings = await self._call(
                    "get_listings", lambda: self._market.get_listings(key.asset_id, key.variant)
                )
                floor = await self._call(
                    "get_floor_price", lambda: self._market.get_floor_price(key.asset_id, key.variant)
                )
            except MarketClientError as e:
                self._logger.warning("market_scan_failed", cycle="standard", asset=str(key), error=str(e))
                continue
            if not await self._evaluate_against_reference(key, listings, floor, "standard", high_priority, results):
                break
        self._logger.info("standard_cycle_finished", executed=sum(r.executed for r in results))
        return results

    async def _evaluate_against_reference(
        self,
        key: AssetKey,
        listings: list[Listing],
        reference: Optional[Decimal],
        strategy: Strategy,
        high_priority: set[AssetKey],
        results: list[ExecutionResult],
    ) -> bool:
        """Check specials and buy every listing undervalued against reference.

        Return False once the emergency stop engages, so the caller ends the cycle.
        """
        if reference is None or reference <= 0:
            self._logger.info("reference_price_unavailable", asset=str(key), strategy=strategy)
        markup = self._settings.trading.markup_factor
        for listing in listings:
            if listing.price <= 0:
                self._logger.warning("listing_price_invalid", card_id=listing.card_id, price=listing.price)
                continue
            self._check_special_card(listing, high_priority)
            if reference is None or reference <= 0:
                continue
            if not self._evaluator.is_undervalued(listing.price, reference):
                continue
            self._logger.info(
                "undervalued_listing_found",
                card_id=listing.card_id,
                asset=str(key),
                price=listing.price,
                reference_price=reference,
            )
            resale = self._evaluator.markup_price(listing.price, markup)
            result = await self._execute_purchase(listing, resale, strategy, key in high_priority)
            results.append(result)
            if result.status is ExecutionStatus.SKIPPED_EMERGENCY_STOP:
                return False
        return True

    def _check_special_card(self, listing: Listing, high_priority: set[AssetKey]) -> None:
        serial = listing.serial
        key = listing.key
        if serial is not None:
            if self._preferences.is_jersey_mint_enabled() and serial.is_jersey_mint:
                max_price = self._preferences.get_jersey_mint_max_price()
                if max_price is None or listing.price <= max_price:
                    self._special_card_found("jersey_mint", listing)
            if self._preferences.is_favorite_serial(serial.serial, key.variant):
                self._special_card_found("favorite_serial", listing)
        if key in high_priority:
            average = self._history.average_of_last(key, self._history.window)
            if average is not None and listing.price < average:
                self._special_card_found("below_average", listing, reference_price=average)

    def _special_card_found(
        self,
        kind: Literal["favorite_serial", "jersey_mint", "below_average"],
        listing: Listing,
        reference_price: Optional[Decimal] = None,
    ) -> None:
        self._logger.info(
            "special_card_found",
            kind=kind,
            card_id=listing.card_id,
            asset=str(listing.key),
            price=listing.price,
            serial=listing.serial.label if listing.serial else None,
            seller=listing.seller,
        )
        self._emit(
            SpecialCardFoundEvent(
                kind=kind,
                card_id=listing.card_id,
                asset_id=listing.key.asset_id,
                variant=listing.key.variant,
                price=listing.price,
                seller=listing.seller,
                serial_label=listing.serial.label if listing.serial else None,
                reference_price=reference_price,
            )
        )

    # ----- high-priority cycle -----

    async def run_high_priority_cycle(self) -> list[ExecutionResult]:
        """Buy the cheapest listing of each high-priority asset when it beats the rolling average.

        Without enough history, the floor price is recorded as a bootstrap sale
        and the standard undervaluation rule applies instead.
        """
        if self._emergency_skip("high_priority"):
            return []
        assets = self._high_priority.list_all()
        if not assets:
            self._logger.info("high_priority_cycle_empty")
            return []
        self._logger.info("high_priority_cycle_started", assets=len(assets))
        high_priority = set(assets)
        window = self._history.window
        results: list[ExecutionResult] = []

        for key in assets:
            try:
                listings = await self._call(
                    "get_listings", lambda: self._market.get_listings(key.asset_id, key.variant)
                )
            except MarketClientError as e:
                self._logger.warning("market_scan_failed", cycle="high_priority", asset=str(key), error=str(e))
                continue
            if not listings:
                self._logger.info("high_priority_no_listings", asset=str(key))
                continue

            average = self._history.average_of_last(key, window)
            if average is None:
                if not await self._bootstrap_high_priority(key, listings, high_priority, results):
                    break
                continue

            valid = [listing for listing in listings if listing.price > 0]
            if not valid:
                continue
            lowest = min(valid, key=lambda listing: listing.price)
            if lowest.price >= average:
                self._logger.info(
                    "high_priority_no_bargain", asset=str(key), lowest_price=lowest.price, average=average
                )
                continue
            self._special_card_found("below_average", lowest, reference_price=average)
            resale = max(self._evaluator.markup_price(lowest.price, self._settings.trading.markup_factor), average)
            result = await self._execute_purchase(lowest, resale, "high_priority", True)
            results.append(result)
            if result.status is ExecutionStatus.SKIPPED_EMERGENCY_STOP:
                break

        self._logger.info("high_priority_cycle_finished", executed=sum(r.executed for r in results))
        return results

    async def _bootstrap_high_priority(
        self,
        key: AssetKey,
        listings: list[Listing],
        high_priority: set[AssetKey],
        results: list[ExecutionResult],
    ) -> bool:
        try:
            floor = await self._call(
                "get_floor_price", lambda: self._market.get_floor_price(key.asset_id, key.variant)
            )
        except MarketClientError as e:
            self._logger.warning("market_scan_failed", cycle="high_priority", asset=str(key), error=str(e))
            return True
        if floor is None or floor <= 0:
            self._logger.info("high_priority_floor_unavailable", asset=str(key))
            return True
        self._history.record_sale(key, floor)
        self._logger.info("high_priority_history_bootstrapped", asset=str(key), floor_price=floor)
        return await self._evaluate_against_reference(key, listings, floor, "high_priority", high_priority, results)

    # ----- execution sequence -----

    async def _execute_purchase(
        self,
        listing: Listing,
        resale_price: Decimal,
        strategy: Strategy,
        is_high_priority: bool,
    ) -> ExecutionResult:
        """Guarded buy-then-relist of one listing."""
        card_id = listing.card_id
        price = listing.price
        log = self._logger.bind(card_id=card_id, asset=str(listing.key), price=price, strategy=strategy)

        if self._emergency.is_active():
            log.warning("purchase_skipped_emergency_stop")
            return ExecutionResult(ExecutionStatus.SKIPPED_EMERGENCY_STOP, card_id=card_id, price=price)
        if not self._rate_limiter.try_reserve():
            log.info("purchase_skipped_rate_limit")
            return ExecutionResult(ExecutionStatus.SKIPPED_RATE_LIMIT, card_id=card_id, price=price)

        transaction_id = str(uuid4())
        description = f"buy {card_id} ({listing.key}) {strategy}"
        decision = self._spending.authorize(transaction_id, price, description)
        if not decision.approved:
            return ExecutionResult(
                ExecutionStatus.REJECTED_SPENDING, card_id=card_id, price=price, detail=decision.value
            )

        try:
            tx_hash = await self._call("submit_buy", lambda: self._market.submit_buy(card_id, price))
        except MarketClientError as e:
            error = str(e)
            log.warning("purchase_failed", error=error)
            return ExecutionResult(ExecutionStatus.BUY_FAILED, card_id=card_id, price=price, detail=error)

        log.info("purchase_executed", transaction_hash=tx_hash)
        self._spending.record(transaction_id, price, description)
        self._transactions.append(
            TransactionRecord.create(card_id, TransactionKind.PURCHASE, price, tx_hash, recorded_at=self._clock())
        )
        if is_high_priority:
            self._history.record_sale(listing.key, price)

        if self._emergency.is_active():
            return self._reconciliation_gap(listing, resale_price, tx_hash, "emergency_stop", None)
        try:
            listing_id = await self._call(
                "create_listing", lambda: self._market.create_listing(card_id, resale_price)
            )
        except MarketClientError as e:
            return self._reconciliation_gap(listing, resale_price, tx_hash, "listing_failed", str(e))
        except asyncio.CancelledError:
            self._reconciliation_gap(listing, resale_price, tx_hash, "cancelled", None)
            raise

        self._transactions.append(
            TransactionRecord.create(
                card_id, TransactionKind.LISTING, resale_price, listing_id, recorded_at=self._clock()
            )
        )
        log.info("card_relisted", listing_id=listing_id, resale_price=resale_price)
        self._emit(
            TradeExecutedEvent(
                action="purchase",
                strategy=strategy,
                card_id=card_id,
                asset_id=listing.key.asset_id,
                variant=listing.key.variant,
                price=price,
                resale_price=resale_price,
                transaction_hash=tx_hash,
                listing_id=listing_id,
            )
        )
        return ExecutionResult(
            ExecutionStatus.EXECUTED,
            card_id=card_id,
            price=price,
            resale_price=resale_price,
            transaction_hash=tx_hash,
            listing_id=listing_id,
        )

    def _reconciliation_gap(
        self,
        listing: Listing,
        resale_price: Decimal,
        tx_hash: str,
        reason: Literal["emergency_stop", "listing_failed", "cancelled"],
        error: Optional[str],
    ) -> ExecutionResult:
        self._logger.critical(
            "reconciliation_gap",
            card_id=listing.card_id,
            asset=str(listing.key),
            purchase_price=listing.price,
            resale_price=resale_price,
            transaction_hash=tx_hash,
            reason=reason,
            error=error,
        )
        self._emit(
            ReconciliationGapEvent(
                card_id=listing.card_id,
                asset_id=listing.key.asset_id,
                variant=listing.key.variant,
                purchase_price=listing.price,
                resale_price=resale_price,
                transaction_hash=tx_hash,
                reason=reason,
                error_message=error,
            )
        )
        return ExecutionResult(
            ExecutionStatus.RECONCILIATION_GAP,
            card_id=listing.card_id,
            price=listing.price,
            resale_price=resale_price,
            transaction_hash=tx_hash,
            detail=reason,
        )

    # ----- counter-offer cycle -----

    async def run_counter_offer_cycle(self) -> list[ExecutionResult]:
        """Accept received offers worth at least the configured fraction of our purchase price."""
        if self._emergency_skip("counter_offer"):
            return []
        try:
            offers = await self._call("get_received_offers", self._market.get_received_offers)
        except MarketClientError as e:
            self._logger.warning("offers_fetch_failed", error=str(e))
            return []
        self._logger.info("counter_offer_cycle_started", offers=len(offers))

        results: list[ExecutionResult] = []
        now = self._clock()
        for offer in offers:
            if offer.is_expired(now):
                self._logger.debug("offer_expired", offer_id=offer.id, card_id=offer.card_id)
                continue
            result = await self._evaluate_offer(offer)
            if result is None:
                continue
            results.append(result)
            if result.status is ExecutionStatus.SKIPPED_EMERGENCY_STOP:
                break
        self._logger.info("counter_offer_cycle_finished", accepted=sum(r.executed for r in results))
        return results

    async def _evaluate_offer(self, offer: Offer) -> Optional[ExecutionResult]:
        log = self._logger.bind(offer_id=offer.id, card_id=offer.card_id, offer_price=offer.price)
        purchase_price = self._transactions.last_purchase_price(offer.card_id)
        if purchase_price is None:
            log.warning("offer_without_purchase_record")
            return None
        minimum = purchase_price * self._settings.trading.counter_offer_min_fraction
        if offer.price < minimum:
            log.info("offer_rejected", minimum=minimum, purchase_price=purchase_price)
            return None

        if self._emergency.is_active():
            log.warning("offer_skipped_emergency_stop")
            return ExecutionResult(ExecutionStatus.SKIPPED_EMERGENCY_STOP, card_id=offer.card_id, price=offer.price)
        if not self._rate_limiter.try_reserve():
            log.info("offer_skipped_rate_limit")
            return ExecutionResult(ExecutionStatus.SKIPPED_RATE_LIMIT, card_id=offer.card_id, price=offer.price)

        try:
            tx_hash = await self._call("accept_offer", lambda: self._market.accept_offer(offer.id))
        except MarketClientError as e:
            error = str(e)
            log.warning("offer_accept_failed", error=error)
            return ExecutionResult(ExecutionStatus.ACCEPT_FAILED, card_id=offer.card_id, price=offer.price, detail=error)

        log.info("offer_accepted", transaction_hash=tx_hash, minimum=minimum)
        self._transactions.append(
            TransactionRecord.create(offer.card_id, TransactionKind.SALE, offer.price, tx_hash, recorded_at=self._clock())
        )
        asset_id, variant = await self._record_sale_history(offer)
        self._emit(
            TradeExecutedEvent(
                action="sale",
                strategy="counter_offer",
                card_id=offer.card_id,
                asset_id=asset_id,
                variant=variant,
                price=offer.price,
                transaction_hash=tx_hash,
            )
        )
        return ExecutionResult(
            ExecutionStatus.EXECUTED, card_id=offer.card_id, price=offer.price, transaction_hash=tx_hash
        )

    async def _record_sale_history(self, offer: Offer) -> tuple[Optional[str], Optional[str]]:
        """Append the sale to the rolling history when the card's asset is high-priority."""
        try:
            card = await self._call("get_card", lambda: self._market.get_card(offer.card_id))
        except MarketClientError as e:
            self._logger.warning("card_lookup_failed", card_id=offer.card_id, error=str(e))
            return None, None
        if self._high_priority.contains(card.key):
            self._history.record_sale(card.key, offer.price)
        return card.asset_id, card.variant

# -*- coding: utf-8 -*-
"""In-memory marketplace for dry runs and tests.

Listings, floor prices, cards and offers are seeded by the caller. Buying
moves a card out of the listings into the owned set and debits the balance;
failures can be injected per operation.
"""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import Any, Callable, Optional
from uuid import uuid4

import structlog

from sorare_trading_bot.clients.market_client import IMarketClient
from sorare_trading_bot.exceptions import MarketClientError
from sorare_trading_bot.models.listing import AssetKey, Card, Listing
from sorare_trading_bot.models.offer import Offer


class PaperMarketClient(IMarketClient):
    """Simulated marketplace. Never touches the network."""

    def __init__(
        self,
        balance: Decimal = Decimal("1"),
        *,
        latency_seconds: float = 0.0,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._balance = balance
        self._latency = latency_seconds
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._listings: dict[AssetKey, list[Listing]] = {}
        self._floor_prices: dict[AssetKey, Decimal] = {}
        self._cards: dict[str, Card] = {}
        self._owned: set[str] = set()
        self._offers: dict[str, Offer] = {}
        self._failures: dict[str, list[Exception]] = {}
        self.listed: dict[str, Decimal] = {}
        """card_id -> asking price of our active listings."""
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    # ----- seeding -----

    def add_listing(self, listing: Listing) -> None:
        self._listings.setdefault(listing.key, []).append(listing)
        self._cards[listing.card_id] = Card(
            card_id=listing.card_id,
            asset_id=listing.key.asset_id,
            variant=listing.key.variant,
            serial=listing.serial,
        )

    def set_floor_price(self, asset_id: str, variant: str, price: Optional[Decimal]) -> None:
        key = AssetKey.create(asset_id, variant)
        if price is None:
            self._floor_prices.pop(key, None)
        else:
            self._floor_prices[key] = price

    def add_card(self, card: Card, *, owned: bool = False) -> None:
        self._cards[card.card_id] = card
        if owned:
            self._owned.add(card.card_id)

    def add_offer(self, offer: Offer) -> None:
        self._offers[offer.id] = offer

    def fail_next(self, operation: str, error: Optional[Exception] = None) -> None:
        """Make the next call of operation (method name) raise error (MarketClientError by default)."""
        self._failures.setdefault(operation, []).append(
            error or MarketClientError(f"injected failure in {operation}", operation=operation)
        )

    @property
    def owned_cards(self) -> set[str]:
        return set(self._owned)

    # ----- IMarketClient -----

    async def _enter(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        if self._latency:
            await asyncio.sleep(self._latency)
        pending = self._failures.get(operation)
        if pending:
            raise pending.pop(0)

    async def get_listings(self, asset_id: str, variant: str) -> list[Listing]:
        await self._enter("get_listings", asset_id, variant)
        return list(self._listings.get(AssetKey.create(asset_id, variant), []))

    async def get_floor_price(self, asset_id: str, variant: str) -> Optional[Decimal]:
        await self._enter("get_floor_price", asset_id, variant)
        return self._floor_prices.get(AssetKey.create(asset_id, variant))

    async def submit_buy(self, card_id: str, price: Decimal) -> str:
        await self._enter("submit_buy", card_id, price)
        for key, listings in self._listings.items():
            for listing in listings:
                if listing.card_id != card_id:
                    continue
                if price < listing.price:
                    raise MarketClientError(
                        f"bid {price} below asking price {listing.price}", operation="submit_buy"
                    )
                if price > self._balance:
                    raise MarketClientError("insufficient balance", operation="submit_buy")
                listings.remove(listing)
                self._owned.add(card_id)
                self._balance -= price
                tx_hash = f"0x{uuid4().hex}"
                self._logger.info("paper_buy", card_id=card_id, price=str(price), tx_hash=tx_hash)
                return tx_hash
        raise MarketClientError(f"card {card_id} is not listed", operation="submit_buy")

    async def create_listing(self, card_id: str, price: Decimal) -> str:
        await self._enter("create_listing", card_id, price)
        if card_id not in self._owned:
            raise MarketClientError(f"card {card_id} is not owned", operation="create_listing")
        self.listed[card_id] = price
        listing_id = f"listing-{uuid4().hex[:12]}"
        self._logger.info("paper_listing_created", card_id=card_id, price=str(price), listing_id=listing_id)
        return listing_id

    async def accept_offer(self, offer_id: str) -> str:
        await self._enter("accept_offer", offer_id)
        offer = self._offers.pop(offer_id, None)
        if offer is None:
            raise MarketClientError(f"offer {offer_id} not found", operation="accept_offer")
        self._owned.discard(offer.card_id)
        self.listed.pop(offer.card_id, None)
        self._balance += offer.price
        tx_hash = f"0x{uuid4().hex}"
        self._logger.info("paper_offer_accepted", offer_id=offer_id, price=str(offer.price), tx_hash=tx_hash)
        return tx_hash

    async def get_received_offers(self) -> list[Offer]:
        await self._enter("get_received_offers")
        return list(self._offers.values())

    async def get_card(self, card_id: str) -> Card:
        await self._enter("get_card", card_id)
        card = self._cards.get(card_id)
        if card is None:
            raise MarketClientError(f"card {card_id} not found", operation="get_card")
        return card

    async def get_balance(self) -> Decimal:
        await self._enter("get_balance")
        return self._balance

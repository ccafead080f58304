# -*- coding: utf-8 -*-
"""Abstract marketplace client used by the trade executor.

Implementations wrap the marketplace API (queries) and the signing/transaction
layer (buy, list, accept). Every failure surfaces as MarketClientError; the
caller applies its own timeout.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from sorare_trading_bot.models.listing import Card, Listing
from sorare_trading_bot.models.offer import Offer


class IMarketClient(ABC):
    """Interface for marketplace queries and transactions."""

    @abstractmethod
    async def get_listings(self, asset_id: str, variant: str) -> list[Listing]:
        """Return the current listings for (asset_id, variant)."""
        ...

    @abstractmethod
    async def get_floor_price(self, asset_id: str, variant: str) -> Optional[Decimal]:
        """Return the lowest recent price for (asset_id, variant), or None when unknown."""
        ...

    @abstractmethod
    async def submit_buy(self, card_id: str, price: Decimal) -> str:
        """Buy card_id at price. Return the transaction hash."""
        ...

    @abstractmethod
    async def create_listing(self, card_id: str, price: Decimal) -> str:
        """List an owned card for sale. Return the listing id."""
        ...

    @abstractmethod
    async def accept_offer(self, offer_id: str) -> str:
        """Accept a received offer. Return the transaction hash."""
        ...

    @abstractmethod
    async def get_received_offers(self) -> list[Offer]:
        ...

    @abstractmethod
    async def get_card(self, card_id: str) -> Card:
        ...

    @abstractmethod
    async def get_balance(self) -> Decimal:
        """Return the wallet balance in ETH."""
        ...

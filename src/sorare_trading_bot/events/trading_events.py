# -*- coding: utf-8 -*-
"""Trading events (emitted by TradeExecutor, handled by TradeActivityNotifier)."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]


class TradeExecutedEvent(BaseEvent[None]):
    """Emitted after a purchase (and its relisting) or an accepted offer completed."""

    action: Literal["purchase", "sale"]
    strategy: Literal["standard", "high_priority", "counter_offer"]
    card_id: str
    asset_id: str | None = None
    variant: str | None = None
    price: Decimal
    """Purchase price, or offer price for a sale."""

    resale_price: Decimal | None = None
    """Asking price of the listing created after a purchase."""

    transaction_hash: str
    listing_id: str | None = None


class ReconciliationGapEvent(BaseEvent[None]):
    """Emitted when a card was bought but could not be relisted.

    The purchase is already recorded; the card sits unlisted until an operator acts.
    """

    card_id: str
    asset_id: str
    variant: str
    purchase_price: Decimal
    resale_price: Decimal
    transaction_hash: str
    reason: Literal["emergency_stop", "listing_failed", "cancelled"]
    error_message: str | None = None


class SpecialCardFoundEvent(BaseEvent[None]):
    """Emitted when a scanned listing matches a favorite serial, a jersey mint, or beats the rolling average."""

    kind: Literal["favorite_serial", "jersey_mint", "below_average"]
    card_id: str
    asset_id: str
    variant: str
    price: Decimal
    seller: str
    serial_label: str | None = None
    reference_price: Decimal | None = None
    """Rolling average for below_average."""

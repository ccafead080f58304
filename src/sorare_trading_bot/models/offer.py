"""Offer: a purchase offer received for one of our listed cards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Offer:
    """Received offer, re-read from the marketplace every reconciliation cycle.

    Expiry is derived from expires_at, never stored.
    """

    id: str
    card_id: str
    counterparty: str
    price: Decimal
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        """Return True once now is past expires_at."""
        return (now or datetime.now(UTC)) > self.expires_at

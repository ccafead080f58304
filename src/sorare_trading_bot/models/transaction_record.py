# -*- coding: utf-8 -*-
"""TransactionRecord: append-only log entry of an executed marketplace action."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4


class TransactionKind(str, Enum):
    """What the bot did on the marketplace."""

    PURCHASE = "PURCHASE"
    LISTING = "LISTING"
    SALE = "SALE"


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One executed purchase, listing or sale.

    reference is the transaction hash (purchase, sale) or the listing id (listing).
    Records are appended, never updated or deleted.
    """

    id: str
    card_id: str
    kind: TransactionKind
    amount: Decimal
    reference: str
    recorded_at: datetime

    @classmethod
    def create(
        cls,
        card_id: str,
        kind: TransactionKind,
        amount: Decimal,
        reference: str,
        *,
        id: str | None = None,
        recorded_at: datetime | None = None,
    ) -> TransactionRecord:
        """Create a new record with a generated id and current UTC timestamp by default."""
        card_id = card_id.strip()
        if not card_id:
            raise ValueError("card_id must be non-empty")
        if amount <= 0:
            raise ValueError("amount must be positive")
        return cls(
            id=id or str(uuid4()),
            card_id=card_id,
            kind=kind,
            amount=amount,
            reference=reference,
            recorded_at=recorded_at or datetime.now(UTC),
        )

    def __str__(self) -> str:
        return (
            f"{self.recorded_at.isoformat()} {self.kind.value:<8} {self.card_id} "
            f"{self.amount} ETH ({self.reference})"
        )

# -*- coding: utf-8 -*-
"""Abstract interface for the append-only transaction log."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sorare_trading_bot.models.transaction_record import TransactionKind, TransactionRecord


class ITransactionRepository(ABC):
    """Interface for persisting TransactionRecord (purchases, listings, sales)."""

    @abstractmethod
    def append(self, record: TransactionRecord) -> None:
        """Append a record. Records are never updated or deleted."""
        ...

    @abstractmethod
    def list_recent(self, limit: int = 10) -> list[TransactionRecord]:
        """Return the most recent records, newest first."""
        ...

    @abstractmethod
    def list_since(
        self,
        since: datetime,
        kinds: Optional[set[TransactionKind]] = None,
    ) -> list[TransactionRecord]:
        """Return records strictly after since, oldest first, optionally filtered by kind."""
        ...

    @abstractmethod
    def last_for_card(self, card_id: str, kind: TransactionKind) -> Optional[TransactionRecord]:
        """Return the newest record of the given kind for card_id, or None."""
        ...

    def last_purchase_price(self, card_id: str) -> Optional[Decimal]:
        """Return the amount of the newest PURCHASE of card_id, or None when never bought."""
        record = self.last_for_card(card_id, TransactionKind.PURCHASE)
        return record.amount if record is not None else None

"""In-memory transaction log (list in append order)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sorare_trading_bot.models.transaction_record import TransactionKind, TransactionRecord
from sorare_trading_bot.persistence.repositories.interfaces.transaction_repository import (
    ITransactionRepository,
)


class InMemoryTransactionRepository(ITransactionRepository):
    """In-memory implementation of ITransactionRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory log."""
        self._records: list[TransactionRecord] = []

    def append(self, record: TransactionRecord) -> None:
        self._records.append(record)

    def list_recent(self, limit: int = 10) -> list[TransactionRecord]:
        """Return the most recent records (by recorded_at), newest first."""
        ordered = sorted(
            enumerate(self._records),
            key=lambda item: (item[1].recorded_at, item[0]),
            reverse=True,
        )
        return [r for _, r in ordered[: max(limit, 0)]]

    def list_since(
        self,
        since: datetime,
        kinds: Optional[set[TransactionKind]] = None,
    ) -> list[TransactionRecord]:
        return sorted(
            (
                r
                for r in self._records
                if r.recorded_at > since and (kinds is None or r.kind in kinds)
            ),
            key=lambda r: r.recorded_at,
        )

    def last_for_card(self, card_id: str, kind: TransactionKind) -> Optional[TransactionRecord]:
        matches = [r for r in self._records if r.card_id == card_id and r.kind == kind]
        if not matches:
            return None
        return max(reversed(matches), key=lambda r: r.recorded_at)

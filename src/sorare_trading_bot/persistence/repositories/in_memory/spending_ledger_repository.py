"""In-memory spending ledger."""

from __future__ import annotations

from datetime import datetime

from sorare_trading_bot.models.spending import SpendRecord
from sorare_trading_bot.persistence.repositories.interfaces.spending_ledger_repository import (
    ISpendingLedgerRepository,
)


class InMemorySpendingLedgerRepository(ISpendingLedgerRepository):
    """In-memory implementation of ISpendingLedgerRepository."""

    def __init__(self) -> None:
        self._records: list[SpendRecord] = []

    def append(self, record: SpendRecord) -> None:
        self._records.append(record)

    def list_since(self, since: datetime) -> list[SpendRecord]:
        return sorted(
            (r for r in self._records if r.recorded_at > since),
            key=lambda r: r.recorded_at,
        )

# -*- coding: utf-8 -*-
"""Abstract interface for the spending ledger used by SpendingGuard."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from sorare_trading_bot.models.spending import SpendRecord


class ISpendingLedgerRepository(ABC):
    """Interface for SpendRecord storage. Budgets are recomputed from it on every check."""

    @abstractmethod
    def append(self, record: SpendRecord) -> None:
        ...

    @abstractmethod
    def list_since(self, since: datetime) -> list[SpendRecord]:
        """Return records strictly after since, oldest first."""
        ...

"""In-memory repository implementations."""

from sorare_trading_bot.persistence.repositories.in_memory.preference_repository import (
    InMemoryPreferenceRepository,
)
from sorare_trading_bot.persistence.repositories.in_memory.sales_history_repository import (
    InMemorySalesHistoryRepository,
)
from sorare_trading_bot.persistence.repositories.in_memory.spending_ledger_repository import (
    InMemorySpendingLedgerRepository,
)
from sorare_trading_bot.persistence.repositories.in_memory.transaction_repository import (
    InMemoryTransactionRepository,
)
from sorare_trading_bot.persistence.repositories.in_memory.watchlist_repository import (
    InMemoryWatchlistRepository,
)

__all__ = [
    "InMemoryPreferenceRepository",
    "InMemorySalesHistoryRepository",
    "InMemorySpendingLedgerRepository",
    "InMemoryTransactionRepository",
    "InMemoryWatchlistRepository",
]

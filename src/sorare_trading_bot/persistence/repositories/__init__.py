"""Repository interfaces and their in-memory, SQLite and file implementations."""

from sorare_trading_bot.persistence.repositories.file import FileHighPriorityRepository
from sorare_trading_bot.persistence.repositories.in_memory import (
    InMemoryPreferenceRepository,
    InMemorySalesHistoryRepository,
    InMemorySpendingLedgerRepository,
    InMemoryTransactionRepository,
    InMemoryWatchlistRepository,
)
from sorare_trading_bot.persistence.repositories.interfaces import (
    IHighPriorityRepository,
    IPreferenceRepository,
    ISalesHistoryRepository,
    ISpendingLedgerRepository,
    ITransactionRepository,
    IWatchlistRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite import (
    SqliteDatabase,
    SqlitePreferenceRepository,
    SqliteSalesHistoryRepository,
    SqliteSpendingLedgerRepository,
    SqliteTransactionRepository,
    SqliteWatchlistRepository,
)

__all__ = [
    "FileHighPriorityRepository",
    "IHighPriorityRepository",
    "IPreferenceRepository",
    "ISalesHistoryRepository",
    "ISpendingLedgerRepository",
    "ITransactionRepository",
    "IWatchlistRepository",
    "InMemoryPreferenceRepository",
    "InMemorySalesHistoryRepository",
    "InMemorySpendingLedgerRepository",
    "InMemoryTransactionRepository",
    "InMemoryWatchlistRepository",
    "SqliteDatabase",
    "SqlitePreferenceRepository",
    "SqliteSalesHistoryRepository",
    "SqliteSpendingLedgerRepository",
    "SqliteTransactionRepository",
    "SqliteWatchlistRepository",
]

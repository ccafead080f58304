"""SQLite repository implementations."""

from sorare_trading_bot.persistence.repositories.sqlite.database import SqliteDatabase
from sorare_trading_bot.persistence.repositories.sqlite.preference_repository import (
    SqlitePreferenceRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.sales_history_repository import (
    SqliteSalesHistoryRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.spending_ledger_repository import (
    SqliteSpendingLedgerRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.transaction_repository import (
    SqliteTransactionRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.watchlist_repository import (
    SqliteWatchlistRepository,
)

__all__ = [
    "SqliteDatabase",
    "SqlitePreferenceRepository",
    "SqliteSalesHistoryRepository",
    "SqliteSpendingLedgerRepository",
    "SqliteTransactionRepository",
    "SqliteWatchlistRepository",
]

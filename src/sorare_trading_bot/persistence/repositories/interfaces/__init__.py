"""Repository interfaces."""

from sorare_trading_bot.persistence.repositories.interfaces.high_priority_repository import (
    IHighPriorityRepository,
)
from sorare_trading_bot.persistence.repositories.interfaces.preference_repository import (
    IPreferenceRepository,
)
from sorare_trading_bot.persistence.repositories.interfaces.sales_history_repository import (
    ISalesHistoryRepository,
)
from sorare_trading_bot.persistence.repositories.interfaces.spending_ledger_repository import (
    ISpendingLedgerRepository,
)
from sorare_trading_bot.persistence.repositories.interfaces.transaction_repository import (
    ITransactionRepository,
)
from sorare_trading_bot.persistence.repositories.interfaces.watchlist_repository import (
    IWatchlistRepository,
)

__all__ = [
    "IHighPriorityRepository",
    "IPreferenceRepository",
    "ISalesHistoryRepository",
    "ISpendingLedgerRepository",
    "ITransactionRepository",
    "IWatchlistRepository",
]

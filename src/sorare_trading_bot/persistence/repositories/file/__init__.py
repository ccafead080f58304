"""File-backed repository implementations."""

from sorare_trading_bot.persistence.repositories.file.high_priority_file_repository import (
    FileHighPriorityRepository,
)

__all__ = ["FileHighPriorityRepository"]

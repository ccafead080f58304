"""Custom exceptions for the trading bot."""

from __future__ import annotations


class SorareBotError(Exception):
    """Base exception for trading-bot errors."""

    pass


class MissingRequiredConfigError(SorareBotError):
    """Raised when one or more required configuration values are missing."""

    def __init__(self, *keys: str) -> None:
        super().__init__(f"Missing required configuration: {', '.join(keys)}")
        self.keys = keys


class MarketClientError(SorareBotError):
    """Raised when a marketplace call (query or transaction) fails."""

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.cause = cause


class EmergencyStopDirectoryError(SorareBotError):
    """Raised at startup when the emergency marker directory cannot be created or read."""

    def __init__(self, directory: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"Emergency stop directory is not usable: {directory}")
        self.directory = directory
        self.cause = cause

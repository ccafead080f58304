# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, SPENDING__MAX_DAILY_ETH.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "sorare-trading-bot"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/sorare_trading_bot.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class MarketSettings(BaseSettings):
    """Marketplace client configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    request_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Upper bound for a single marketplace call (listings, buy, list, accept).",
    )
    paper_balance_eth: Decimal = Field(
        default=Decimal("1"),
        ge=0,
        description="Starting balance of the paper client used when no real client is wired.",
    )


class TradingSettings(BaseSettings):
    """Pricing rules and cycle cadence."""

    model_config = SettingsConfigDict(extra="ignore")

    discount_fraction: Decimal = Field(
        default=Decimal("0.15"),
        gt=0,
        lt=1,
        description="A listing is undervalued when priced below floor * (1 - discount_fraction).",
    )
    markup_factor: Decimal = Field(
        default=Decimal("1.05"),
        ge=1,
        description="Resale price multiplier applied to the purchase price.",
    )
    counter_offer_min_fraction: Decimal = Field(
        default=Decimal("0.95"),
        gt=0,
        description="Offers at or above purchase_price * counter_offer_min_fraction are accepted.",
    )
    history_window: int = Field(
        default=5,
        ge=1,
        le=5,
        description="Number of recent sales averaged by the high-priority rule.",
    )
    standard_scan_interval_seconds: float = Field(default=300.0, ge=1.0)
    high_priority_scan_interval_seconds: float = Field(default=900.0, ge=300.0, le=900.0)
    counter_offer_interval_seconds: float = Field(default=1800.0, ge=1.0)
    standard_scan_initial_delay_seconds: float = Field(default=0.0, ge=0.0)
    high_priority_scan_initial_delay_seconds: float = Field(default=60.0, ge=0.0)
    counter_offer_initial_delay_seconds: float = Field(default=120.0, ge=0.0)
    shutdown_grace_seconds: float = Field(
        default=30.0,
        ge=0.0,
        description="How long stop() waits for in-flight cycles before cancelling them.",
    )


class SpendingSettings(BaseSettings):
    """Transaction rate and spending ceilings (all ETH amounts)."""

    model_config = SettingsConfigDict(extra="ignore")

    max_transactions_per_hour: int = Field(default=5, ge=1, le=1000)
    max_single_transaction_eth: Optional[Decimal] = Field(default=None, gt=0)
    max_daily_eth: Optional[Decimal] = Field(default=None, gt=0)
    max_weekly_eth: Optional[Decimal] = Field(default=None, gt=0)
    high_value_threshold_eth: Optional[Decimal] = Field(default=None, gt=0)
    allow_high_value_without_policy: bool = Field(
        default=True,
        description="Allow high-value transactions (with a warning) when no approval policy is wired.",
    )


class EmergencySettings(BaseSettings):
    """Emergency stop marker directory and poller cadence."""

    model_config = SettingsConfigDict(extra="ignore")

    directory: str = "./security/emergency"
    poll_interval_seconds: float = Field(default=5.0, gt=0.0, le=3600.0)


class StorageSettings(BaseSettings):
    """Durable storage for transactions, spending ledger, history, watchlist and preferences."""

    model_config = SettingsConfigDict(extra="ignore")

    backend: Literal["sqlite", "memory"] = "sqlite"
    db_path: str = "./sorarebot.db"
    high_priority_file: str = "./config/high_priority_players.txt"


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=5, ge=0, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


_REQUIRED_SPENDING_KEYS = (
    "max_single_transaction_eth",
    "max_daily_eth",
    "max_weekly_eth",
    "high_value_threshold_eth",
)


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. TRADING__DISCOUNT_FRACTION, EMERGENCY__DIRECTORY.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    market: MarketSettings = Field(default_factory=MarketSettings)
    trading: TradingSettings = Field(default_factory=TradingSettings)
    spending: SpendingSettings = Field(default_factory=SpendingSettings)
    emergency: EmergencySettings = Field(default_factory=EmergencySettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    def missing_required(self) -> list[str]:
        """Return env names of required settings that are unset (empty when startup may proceed)."""
        return [
            f"SPENDING__{key.upper()}"
            for key in _REQUIRED_SPENDING_KEYS
            if getattr(self.spending, key) is None
        ]

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(spending={"max_daily_eth": "2"})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from sorare_trading_bot.config import get_settings

        settings = get_settings()
        discount = settings.trading.discount_fraction
    """
    return Settings()

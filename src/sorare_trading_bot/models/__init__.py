# -*- coding: utf-8 -*-
"""Domain models."""

from sorare_trading_bot.models.emergency_state import EmergencyState
from sorare_trading_bot.models.listing import AssetKey, Card, Listing, SerialInfo
from sorare_trading_bot.models.offer import Offer
from sorare_trading_bot.models.sales_history import SaleEntry
from sorare_trading_bot.models.spending import BudgetState, SpendRecord
from sorare_trading_bot.models.transaction_record import TransactionKind, TransactionRecord
from sorare_trading_bot.models.watched_asset import WatchedAsset

__all__ = [
    "AssetKey",
    "BudgetState",
    "Card",
    "EmergencyState",
    "Listing",
    "Offer",
    "SaleEntry",
    "SerialInfo",
    "SpendRecord",
    "TransactionKind",
    "TransactionRecord",
    "WatchedAsset",
]

# -*- coding: utf-8 -*-
"""Event bus and event types."""

from sorare_trading_bot.events.bus import create_event_bus, get_event_bus, reset_event_bus
from sorare_trading_bot.events.trading_events import (
    ReconciliationGapEvent,
    SpecialCardFoundEvent,
    TradeExecutedEvent,
)

__all__ = [
    "ReconciliationGapEvent",
    "SpecialCardFoundEvent",
    "TradeExecutedEvent",
    "create_event_bus",
    "get_event_bus",
    "reset_event_bus",
]

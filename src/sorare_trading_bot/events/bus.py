"""Process-wide bubus bus carrying trade, special-card and reconciliation events."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]

BUS_NAME = "SorareTradingBot"
HISTORY_SIZE = 500

_bus: EventBus | None = None


def create_event_bus(name: str = BUS_NAME, *, history_size: int = HISTORY_SIZE) -> EventBus:
    """Build a standalone bus without a write-ahead log."""
    return EventBus(name=name, max_history_size=history_size, wal_path=None)


def get_event_bus() -> EventBus:
    global _bus
    if _bus is None:
        _bus = create_event_bus()
    return _bus


def reset_event_bus(bus: EventBus | None = None) -> None:
    """Replace the shared bus; None makes the next get_event_bus() build a fresh one."""
    global _bus
    _bus = bus

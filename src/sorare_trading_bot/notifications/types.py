"""Notification message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

PURCHASE_EXECUTED = "purchase_executed"
SALE_EXECUTED = "sale_executed"
RECONCILIATION_GAP = "reconciliation_gap"
SPECIAL_CARD = "special_card"
SYSTEM_STARTED = "system_started"
SYSTEM_STOPPED = "system_stopped"

# Delivered with sound on Telegram; everything else goes out silently.
URGENT_EVENT_TYPES = frozenset({RECONCILIATION_GAP, SPECIAL_CARD})


@dataclass(frozen=True)
class NotificationMessage:
    """A trading event rendered for humans.

    event_type is one of the module constants; unknown types still render,
    through the styler's generic layout.
    """

    event_type: str
    message: str
    title: str | None = None
    payload: dict[str, Any] | None = None

    @property
    def urgent(self) -> bool:
        return self.event_type in URGENT_EVENT_TYPES


class NotificationStyler(Protocol):
    def render(self, message: NotificationMessage) -> str:
        ...

# -*- coding: utf-8 -*-
"""TradeActivityNotifier: turns trading events into notifications."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from sorare_trading_bot.events.trading_events import (
    ReconciliationGapEvent,
    SpecialCardFoundEvent,
    TradeExecutedEvent,
)
from sorare_trading_bot.notifications.types import (
    PURCHASE_EXECUTED,
    RECONCILIATION_GAP,
    SALE_EXECUTED,
    SPECIAL_CARD,
    NotificationMessage,
)
from sorare_trading_bot.utils.masking import mask_identifier

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from sorare_trading_bot.notifications.notification_manager import NotificationService


def _eth(value: Optional[Decimal]) -> Optional[str]:
    return str(value) if value is not None else None


class TradeActivityNotifier:
    """Subscribes to trade, reconciliation-gap and special-card events."""

    _HANDLED = (TradeExecutedEvent, ReconciliationGapEvent, SpecialCardFoundEvent)

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        self._event_bus.on(TradeExecutedEvent, self._on_trade_executed)
        self._event_bus.on(ReconciliationGapEvent, self._on_reconciliation_gap)
        self._event_bus.on(SpecialCardFoundEvent, self._on_special_card)
        self._logger.debug("trade_activity_notifier_started")

    def stop(self) -> None:
        handlers = getattr(self._event_bus, "handlers", {})
        mine = (self._on_trade_executed, self._on_reconciliation_gap, self._on_special_card)
        for event_cls in self._HANDLED:
            key = event_cls.__name__
            if key in handlers:
                handlers[key] = [h for h in handlers[key] if h not in mine]
        self._logger.debug("trade_activity_notifier_stopped")

    def _on_trade_executed(self, event: TradeExecutedEvent) -> None:
        if event.action == "purchase":
            event_type = PURCHASE_EXECUTED
            message = f"Bought {event.card_id} for {event.price} ETH and listed it at {event.resale_price} ETH"
        else:
            event_type = SALE_EXECUTED
            message = f"Sold {event.card_id} for {event.price} ETH"
        self._notification_service.notify(
            NotificationMessage(
                event_type=event_type,
                message=message,
                payload={
                    "card_id": event.card_id,
                    "asset_id": event.asset_id,
                    "variant": event.variant,
                    "strategy": event.strategy,
                    "price": _eth(event.price),
                    "resale_price": _eth(event.resale_price),
                    "transaction_hash": event.transaction_hash,
                    "listing_id": event.listing_id,
                },
            )
        )
        self._logger.debug("trade_executed_notified", card_id=event.card_id, action=event.action)

    def _on_reconciliation_gap(self, event: ReconciliationGapEvent) -> None:
        if event.reason == "emergency_stop":
            message = "Emergency stop engaged after the purchase; the card was not relisted."
        elif event.reason == "cancelled":
            message = "The bot shut down while relisting; the card must be listed manually."
        else:
            message = "Relisting failed after the purchase; the card must be listed manually."
        self._notification_service.notify(
            NotificationMessage(
                event_type=RECONCILIATION_GAP,
                message=message,
                payload={
                    "card_id": event.card_id,
                    "asset_id": event.asset_id,
                    "variant": event.variant,
                    "purchase_price": _eth(event.purchase_price),
                    "resale_price": _eth(event.resale_price),
                    "transaction_hash": event.transaction_hash,
                    "reason": event.reason,
                    "error_message": event.error_message,
                },
            )
        )
        self._logger.debug("reconciliation_gap_notified", card_id=event.card_id, reason=event.reason)

    def _on_special_card(self, event: SpecialCardFoundEvent) -> None:
        self._notification_service.notify(
            NotificationMessage(
                event_type=SPECIAL_CARD,
                message=f"{event.kind.replace('_', ' ')}: {event.card_id} at {event.price} ETH",
                payload={
                    "kind": event.kind,
                    "card_id": event.card_id,
                    "asset_id": event.asset_id,
                    "variant": event.variant,
                    "price": _eth(event.price),
                    "serial": event.serial_label,
                    "reference_price": _eth(event.reference_price),
                    "seller": mask_identifier(event.seller),
                },
            )
        )
        self._logger.debug("special_card_notified", card_id=event.card_id, kind=event.kind)

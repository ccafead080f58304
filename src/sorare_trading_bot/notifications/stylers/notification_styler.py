# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji separators (Telegram HTML)."""

from __future__ import annotations

import html
from decimal import Decimal, InvalidOperation
from typing import Any

from sorare_trading_bot.notifications.types import (
    PURCHASE_EXECUTED,
    RECONCILIATION_GAP,
    SALE_EXECUTED,
    SPECIAL_CARD,
    SYSTEM_STARTED,
    SYSTEM_STOPPED,
    NotificationMessage,
    NotificationStyler,
)

_TITLES = {
    PURCHASE_EXECUTED: ("🟢", "Card Bought & Relisted"),
    SALE_EXECUTED: ("💰", "Offer Accepted"),
    RECONCILIATION_GAP: ("🚨", "Bought But Not Relisted"),
    SPECIAL_CARD: ("⭐", "Special Card Found"),
    SYSTEM_STARTED: ("▶️", "System Started"),
    SYSTEM_STOPPED: ("⏹️", "System Stopped"),
}

_SPECIAL_KINDS = {
    "favorite_serial": "Favorite serial",
    "jersey_mint": "Jersey mint",
    "below_average": "Below rolling average",
}


class EventNotificationStyler(NotificationStyler):
    """Render notifications by event_type with emojis, separators and formatted sections."""

    def render(self, message: NotificationMessage) -> str:
        """Dispatch to the appropriate renderer based on event_type."""
        if message.event_type in (PURCHASE_EXECUTED, SALE_EXECUTED):
            return self._render_trade(message)
        if message.event_type == RECONCILIATION_GAP:
            return self._render_gap(message)
        if message.event_type == SPECIAL_CARD:
            return self._render_special(message)
        if message.event_type in (SYSTEM_STARTED, SYSTEM_STOPPED):
            return self._render_system(message)
        return self._render_generic(message)

    def _render_trade(self, message: NotificationMessage) -> str:
        p = message.payload or {}
        lines = [
            self._header(message),
            self._section(
                "🃏 Card",
                [
                    ("🆔 Card", p.get("card_id")),
                    ("👤 Player", p.get("asset_id")),
                    ("💎 Rarity", p.get("variant")),
                    ("🧭 Strategy", p.get("strategy")),
                ],
            ),
            self._section(
                "💵 Prices",
                [
                    ("🪙 Price", self._format_eth(p.get("price"))),
                    ("🏷️ Listed at", self._format_eth(p.get("resale_price"))),
                ],
            ),
            self._section(
                "🔗 References",
                [
                    ("🧾 Transaction", p.get("transaction_hash")),
                    ("📋 Listing", p.get("listing_id")),
                ],
            ),
        ]
        return self._join(lines)

    def _render_gap(self, message: NotificationMessage) -> str:
        p = message.payload or {}
        lines = [
            self._header(message),
            self._section("⚠️ Action Needed", [("", message.message)]),
            self._section(
                "🃏 Card",
                [
                    ("🆔 Card", p.get("card_id")),
                    ("👤 Player", p.get("asset_id")),
                    ("💎 Rarity", p.get("variant")),
                    ("🪙 Bought at", self._format_eth(p.get("purchase_price"))),
                    ("🏷️ Intended price", self._format_eth(p.get("resale_price"))),
                    ("🧾 Transaction", p.get("transaction_hash")),
                    ("❓ Reason", p.get("reason")),
                    ("💥 Error", p.get("error_message")),
                ],
            ),
        ]
        return self._join(lines)

    def _render_special(self, message: NotificationMessage) -> str:
        p = message.payload or {}
        kind = str(p.get("kind") or "")
        lines = [
            self._header(message),
            self._section(
                "✨ Why",
                [
                    ("🔖 Match", _SPECIAL_KINDS.get(kind, kind)),
                    ("🔢 Serial", p.get("serial")),
                    ("📊 Average", self._format_eth(p.get("reference_price"))),
                ],
            ),
            self._section(
                "🃏 Card",
                [
                    ("🆔 Card", p.get("card_id")),
                    ("👤 Player", p.get("asset_id")),
                    ("💎 Rarity", p.get("variant")),
                    ("🪙 Price", self._format_eth(p.get("price"))),
                    ("🙋 Seller", p.get("seller")),
                ],
            ),
        ]
        return self._join(lines)

    def _render_system(self, message: NotificationMessage) -> str:
        p = message.payload or {}
        rows = [(f"• {key}", p[key]) for key in sorted(p) if p[key] is not None]
        lines = [
            self._header(message),
            self._section("🚀 Status", [("", message.message)]),
            self._section("⚙️ Details", rows),
        ]
        return self._join(lines)

    def _render_generic(self, message: NotificationMessage) -> str:
        """Render unknown event types using message and payload."""
        lines = [self._header(message).strip(), html.escape(message.message)]
        if message.payload:
            for key in sorted(message.payload):
                value = message.payload[key]
                if value is not None:
                    lines.append(f"<b>{html.escape(key)}:</b> {html.escape(str(value))}")
        return "\n".join(lines).strip()

    @staticmethod
    def _header(message: NotificationMessage) -> str:
        emoji, title = _TITLES.get(
            message.event_type, ("ℹ️", message.event_type.replace("_", " ").title())
        )
        return f"{emoji} <b>{html.escape(message.title or title)}</b>\n"

    @staticmethod
    def _join(lines: list[str]) -> str:
        return "\n".join(line for line in lines if line).strip()

    def _section(self, header: str, rows: list[tuple[str, Any]]) -> str:
        """Format a section with a header and rows; empty values are skipped."""
        content: list[str] = []
        for label, value in rows:
            if value is None or value == "":
                continue
            text = html.escape(str(value))
            content.append(f"{self._format_label(label)} {text}" if label else text)
        if not content:
            return ""
        return "\n".join([f"{self._format_heading(header)}\n{'─' * 12}", *content]) + "\n"

    @staticmethod
    def _format_eth(value: Any) -> str | None:
        if value is None:
            return None
        try:
            return f"{Decimal(str(value)).normalize():f} ETH"
        except InvalidOperation:
            return str(value)

    @staticmethod
    def _format_heading(text: str) -> str:
        emoji, _, remainder = text.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}</b>"
        return f"<b>{text}</b>"

    @staticmethod
    def _format_label(label: str) -> str:
        emoji, _, remainder = label.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}:</b>"
        return f"<b>{label}:</b>"

"""Masking of counterparty identifiers before they reach logs or chat."""

from __future__ import annotations

import re

_WALLET_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")


def mask_identifier(value: str | None) -> str:
    """Shorten a seller or buyer identifier.

    Wallet addresses keep their first and last hex digits (0x1234...abcd);
    user slugs keep their first four characters.
    """
    if not value or not value.strip():
        return "***"
    value = value.strip()
    if _WALLET_ADDRESS.match(value):
        return f"{value[:6]}...{value[-4:]}"
    return f"{value[:4]}***" if len(value) > 4 else f"{value[0]}***"

"""In-memory notification preferences."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sorare_trading_bot.persistence.repositories.interfaces.preference_repository import (
    IPreferenceRepository,
)


def _variant(variant: Optional[str]) -> Optional[str]:
    """Normalize variant; blank means any variant."""
    if variant is None or not variant.strip():
        return None
    return variant.strip().lower()


class InMemoryPreferenceRepository(IPreferenceRepository):
    """In-memory implementation of IPreferenceRepository."""

    def __init__(self) -> None:
        self._favorite_serials: set[tuple[int, Optional[str]]] = set()
        self._jersey_mint_enabled = False
        self._jersey_mint_max_price: Optional[Decimal] = None

    def add_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        self._favorite_serials.add((serial, _variant(variant)))

    def remove_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        self._favorite_serials.discard((serial, _variant(variant)))

    def list_favorite_serials(self) -> list[tuple[int, Optional[str]]]:
        return sorted(self._favorite_serials, key=lambda item: (item[0], item[1] or ""))

    def is_jersey_mint_enabled(self) -> bool:
        return self._jersey_mint_enabled

    def set_jersey_mint_enabled(self, enabled: bool) -> None:
        self._jersey_mint_enabled = enabled

    def get_jersey_mint_max_price(self) -> Optional[Decimal]:
        return self._jersey_mint_max_price

    def set_jersey_mint_max_price(self, max_price: Optional[Decimal]) -> None:
        self._jersey_mint_max_price = max_price if max_price and max_price > 0 else None

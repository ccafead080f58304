# -*- coding: utf-8 -*-
"""Abstract interface for notification preferences (favorite serials, jersey mints)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class IPreferenceRepository(ABC):
    """Interface for the preferences consulted by the special-card checks.

    A favorite serial stored with variant None matches cards of every variant.
    """

    @abstractmethod
    def add_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def remove_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def list_favorite_serials(self) -> list[tuple[int, Optional[str]]]:
        """Return (serial, variant) pairs ordered by serial."""
        ...

    @abstractmethod
    def is_jersey_mint_enabled(self) -> bool:
        ...

    @abstractmethod
    def set_jersey_mint_enabled(self, enabled: bool) -> None:
        ...

    @abstractmethod
    def get_jersey_mint_max_price(self) -> Optional[Decimal]:
        """Return the max price for jersey-mint alerts, or None for no limit."""
        ...

    @abstractmethod
    def set_jersey_mint_max_price(self, max_price: Optional[Decimal]) -> None:
        ...

    def is_favorite_serial(self, serial: int, variant: str) -> bool:
        """Return True if serial is a favorite for variant (or for any variant)."""
        variant = variant.strip().lower()
        return any(
            s == serial and (v is None or v == variant)
            for s, v in self.list_favorite_serials()
        )

# -*- coding: utf-8 -*-
"""Market snapshot types: AssetKey, SerialInfo, Listing and Card.

A Listing is an immutable snapshot fetched from the marketplace each cycle
and discarded afterwards; the bot never owns or mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True, slots=True, order=True)
class AssetKey:
    """Identity of a watched asset: player id + card rarity (variant)."""

    asset_id: str
    variant: str

    @classmethod
    def create(cls, asset_id: str, variant: str) -> AssetKey:
        """Build a normalized key (stripped id, lower-case variant)."""
        asset_id = asset_id.strip()
        variant = variant.strip().lower()
        if not asset_id or not variant:
            raise ValueError("asset_id and variant must be non-empty")
        return cls(asset_id=asset_id, variant=variant)

    def __str__(self) -> str:
        return f"{self.asset_id}:{self.variant}"


@dataclass(frozen=True, slots=True)
class SerialInfo:
    """Serial-number metadata of a card (e.g. 66/100) and the player's jersey number."""

    serial: int
    serial_count: int
    jersey_number: Optional[int] = None

    @property
    def is_jersey_mint(self) -> bool:
        """True when the serial number equals the player's jersey number."""
        return self.jersey_number is not None and self.serial == self.jersey_number

    @property
    def label(self) -> str:
        return f"{self.serial}/{self.serial_count}"


@dataclass(frozen=True, slots=True)
class Listing:
    """A card offered for sale on the marketplace."""

    card_id: str
    """Marketplace id of the card (what is bought and relisted)."""
    asset_id: str
    """Player id the card belongs to."""
    variant: str
    """Rarity (limited, rare, super_rare, unique)."""
    price: Decimal
    """Asking price in ETH."""
    seller: str
    listed_at: datetime
    serial: Optional[SerialInfo] = None

    @property
    def key(self) -> AssetKey:
        return AssetKey.create(self.asset_id, self.variant)


@dataclass(frozen=True, slots=True)
class Card:
    """A card as returned by a direct lookup (owner-independent metadata)."""

    card_id: str
    asset_id: str
    variant: str
    serial: Optional[SerialInfo] = None

    @property
    def key(self) -> AssetKey:
        return AssetKey.create(self.asset_id, self.variant)

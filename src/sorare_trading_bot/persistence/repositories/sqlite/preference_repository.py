"""SQLite-backed notification preferences."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sorare_trading_bot.persistence.repositories.interfaces.preference_repository import (
    IPreferenceRepository,
)
from sorare_trading_bot.persistence.repositories.sqlite.database import SqliteDatabase

_JERSEY_MINT_ENABLED = "jersey_mint_enabled"
_JERSEY_MINT_MAX_PRICE = "jersey_mint_max_price"


def _variant_column(variant: Optional[str]) -> str:
    # '' stands for "any variant" (NULL cannot take part in the primary key)
    return variant.strip().lower() if variant else ""


class SqlitePreferenceRepository(IPreferenceRepository):
    def __init__(self, database: SqliteDatabase) -> None:
        self._db = database

    def add_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO favorite_serials (serial, variant) VALUES (?, ?)",
                (serial, _variant_column(variant)),
            )

    def remove_favorite_serial(self, serial: int, variant: Optional[str] = None) -> None:
        with self._db.transaction() as conn:
            conn.execute(
                "DELETE FROM favorite_serials WHERE serial = ? AND variant = ?",
                (serial, _variant_column(variant)),
            )

    def list_favorite_serials(self) -> list[tuple[int, Optional[str]]]:
        rows = self._db.fetch_all("SELECT serial, variant FROM favorite_serials ORDER BY serial, variant")
        return [(row["serial"], row["variant"] or None) for row in rows]

    def _get(self, key: str) -> Optional[str]:
        row = self._db.fetch_one("SELECT value FROM preferences WHERE key = ?", (key,))
        return row["value"] if row is not None else None

    def _set(self, key: str, value: Optional[str]) -> None:
        with self._db.transaction() as conn:
            if value is None:
                conn.execute("DELETE FROM preferences WHERE key = ?", (key,))
            else:
                conn.execute(
                    "INSERT INTO preferences (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, value),
                )

    def is_jersey_mint_enabled(self) -> bool:
        return self._get(_JERSEY_MINT_ENABLED) == "1"

    def set_jersey_mint_enabled(self, enabled: bool) -> None:
        self._set(_JERSEY_MINT_ENABLED, "1" if enabled else "0")

    def get_jersey_mint_max_price(self) -> Optional[Decimal]:
        value = self._get(_JERSEY_MINT_MAX_PRICE)
        return Decimal(value) if value is not None else None

    def set_jersey_mint_max_price(self, max_price: Optional[Decimal]) -> None:
        self._set(_JERSEY_MINT_MAX_PRICE, str(max_price) if max_price and max_price > 0 else None)

# -*- coding: utf-8 -*-
"""Sliding one-hour window limiting executed transactions.

Reservation is check-and-record in one critical section, so concurrent
cycles can never admit more than max_per_hour between them. A reservation
is never refunded, even when the transaction it guarded later fails.
"""

from __future__ import annotations

import threading
from collections import deque
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable, Optional

import structlog

from sorare_trading_bot.utils.clock import Clock, utc_now

WINDOW = timedelta(hours=1)


class RateLimiter:
    def __init__(
        self,
        max_per_hour: int = 5,
        *,
        clock: Clock = utc_now,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        if max_per_hour < 1:
            raise ValueError("max_per_hour must be >= 1")
        self._max = max_per_hour
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = threading.Lock()
        self._timestamps: deque[datetime] = deque()

    @property
    def max_per_hour(self) -> int:
        return self._max

    def _evict(self, now: datetime) -> None:
        # strictly older than the window drops out; exactly one hour old still counts
        cutoff = now - WINDOW
        while self._timestamps and self._timestamps[0] < cutoff:
            self._timestamps.popleft()

    def try_reserve(self) -> bool:
        """Record a transaction slot now if the window has room. Return False at the limit."""
        with self._lock:
            now = self._clock()
            self._evict(now)
            count = len(self._timestamps)
            if count >= self._max:
                self._logger.warning(
                    "rate_limit_rejected", transactions_in_window=count, max_per_hour=self._max
                )
                return False
            self._timestamps.append(now)
            return True

    def count_in_window(self) -> int:
        with self._lock:
            self._evict(self._clock())
            return len(self._timestamps)

    def remaining(self) -> int:
        return max(self._max - self.count_in_window(), 0)

    def preload(self, timestamps: Iterable[datetime]) -> None:
        """Seed the window with past transaction times (e.g. from the transaction log)."""
        with self._lock:
            merged = sorted([*self._timestamps, *timestamps])
            self._timestamps = deque(merged)
            self._evict(self._clock())
            loaded = len(self._timestamps)
        self._logger.info("rate_limiter_preloaded", transactions_in_window=loaded)

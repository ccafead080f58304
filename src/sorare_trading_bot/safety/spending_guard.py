# -*- coding: utf-8 -*-
"""Spending ceilings: per transaction, trailing 24 hours and trailing 7 days.

Windows are recomputed from the spending ledger on every check, so a restart
never resets the budget and old spend ages out on its own. High-value
transactions additionally need a yes from the approval policy.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional, Protocol

import structlog

from sorare_trading_bot.models.spending import BudgetState, SpendRecord
from sorare_trading_bot.persistence.repositories.interfaces.spending_ledger_repository import (
    ISpendingLedgerRepository,
)
from sorare_trading_bot.utils.clock import Clock, utc_now

DAY = timedelta(days=1)
WEEK = timedelta(days=7)


class SpendingDecision(str, Enum):
    APPROVED = "APPROVED"
    REJECTED_SINGLE_LIMIT = "REJECTED_SINGLE_LIMIT"
    REJECTED_DAILY_LIMIT = "REJECTED_DAILY_LIMIT"
    REJECTED_WEEKLY_LIMIT = "REJECTED_WEEKLY_LIMIT"
    REJECTED_HIGH_VALUE_NOT_APPROVED = "REJECTED_HIGH_VALUE_NOT_APPROVED"

    @property
    def approved(self) -> bool:
        return self is SpendingDecision.APPROVED


@dataclass(frozen=True, slots=True)
class ApprovalContext:
    """What an approval policy gets to see besides the id and amount."""

    description: str
    remaining_daily: Decimal
    remaining_weekly: Decimal


class ApprovalPolicy(Protocol):
    """Decides on high-value transactions. Returning False (or raising) rejects."""

    def approve(self, transaction_id: str, amount: Decimal, context: ApprovalContext) -> bool: ...


class SpendingGuard:
    def __init__(
        self,
        ledger: ISpendingLedgerRepository,
        *,
        max_single: Decimal,
        max_daily: Decimal,
        max_weekly: Decimal,
        high_value_threshold: Decimal,
        approval_policy: Optional[ApprovalPolicy] = None,
        allow_high_value_without_policy: bool = True,
        clock: Clock = utc_now,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._ledger = ledger
        self._max_single = max_single
        self._max_daily = max_daily
        self._max_weekly = max_weekly
        self._high_value_threshold = high_value_threshold
        self._approval_policy = approval_policy
        self._allow_without_policy = allow_high_value_without_policy
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = threading.Lock()
        self._logger.info(
            "spending_guard_initialized",
            max_single=max_single,
            max_daily=max_daily,
            max_weekly=max_weekly,
            high_value_threshold=high_value_threshold,
            approval_policy=type(approval_policy).__name__ if approval_policy else None,
        )

    def _spent(self) -> tuple[Decimal, Decimal]:
        now = self._clock()
        records = self._ledger.list_since(now - WEEK)
        day_cutoff = now - DAY
        weekly = sum((r.amount for r in records), Decimal("0"))
        daily = sum((r.amount for r in records if r.recorded_at > day_cutoff), Decimal("0"))
        return daily, weekly

    def authorize(self, transaction_id: str, amount: Decimal, description: str = "") -> SpendingDecision:
        """Check amount against every ceiling in order. Rejections are returned, not raised."""
        if amount <= 0:
            raise ValueError("amount must be positive")
        log = self._logger.bind(transaction_id=transaction_id, amount=amount)
        with self._lock:
            if amount > self._max_single:
                log.warning("spending_rejected_single_limit", limit=self._max_single)
                return SpendingDecision.REJECTED_SINGLE_LIMIT

            spent_daily, spent_weekly = self._spent()
            if spent_daily + amount > self._max_daily:
                log.warning("spending_rejected_daily_limit", spent=spent_daily, limit=self._max_daily)
                return SpendingDecision.REJECTED_DAILY_LIMIT
            if spent_weekly + amount > self._max_weekly:
                log.warning("spending_rejected_weekly_limit", spent=spent_weekly, limit=self._max_weekly)
                return SpendingDecision.REJECTED_WEEKLY_LIMIT

            if amount >= self._high_value_threshold:
                context = ApprovalContext(
                    description=description,
                    remaining_daily=max(self._max_daily - spent_daily, Decimal("0")),
                    remaining_weekly=max(self._max_weekly - spent_weekly, Decimal("0")),
                )
                if not self._approve_high_value(transaction_id, amount, context, log):
                    return SpendingDecision.REJECTED_HIGH_VALUE_NOT_APPROVED

        log.info("spending_approved", description=description)
        return SpendingDecision.APPROVED

    def _approve_high_value(
        self, transaction_id: str, amount: Decimal, context: ApprovalContext, log: Any
    ) -> bool:
        if self._approval_policy is None:
            if self._allow_without_policy:
                log.warning("high_value_without_approval_policy", threshold=self._high_value_threshold)
                return True
            log.warning("spending_rejected_high_value_no_policy", threshold=self._high_value_threshold)
            return False
        try:
            approved = bool(self._approval_policy.approve(transaction_id, amount, context))
        except Exception:
            log.exception("approval_policy_failed")
            return False
        if not approved:
            log.warning("spending_rejected_high_value", threshold=self._high_value_threshold)
        return approved

    def record(self, transaction_id: str, amount: Decimal, description: str = "") -> SpendRecord:
        """Append an executed purchase to the ledger. Call once, after the buy succeeded."""
        record = SpendRecord.create(transaction_id, amount, description, recorded_at=self._clock())
        with self._lock:
            self._ledger.append(record)
            spent_daily, spent_weekly = self._spent()
        self._logger.info(
            "spending_recorded",
            transaction_id=transaction_id,
            amount=amount,
            remaining_daily=max(self._max_daily - spent_daily, Decimal("0")),
            remaining_weekly=max(self._max_weekly - spent_weekly, Decimal("0")),
        )
        return record

    def budget_state(self) -> BudgetState:
        with self._lock:
            spent_daily, spent_weekly = self._spent()
        return BudgetState(
            daily_limit=self._max_daily,
            weekly_limit=self._max_weekly,
            spent_daily=spent_daily,
            spent_weekly=spent_weekly,
        )

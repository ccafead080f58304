# -*- coding: utf-8 -*-
"""Unit tests for SpendingGuard."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from decimal import Decimal
from typing import Any

import pytest

from sorare_trading_bot.models.spending import SpendRecord
from sorare_trading_bot.safety import ApprovalContext, SpendingDecision, SpendingGuard


class _Policy:
    def __init__(self, answer: bool = True, error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, Decimal, ApprovalContext]] = []

    def approve(self, transaction_id: str, amount: Decimal, context: ApprovalContext) -> bool:
        self.calls.append((transaction_id, amount, context))
        if self.error is not None:
            raise self.error
        return self.answer


def _guard(ledger: Any, clock: Any, D: Callable[[Any], Decimal], **overrides: Any) -> SpendingGuard:
    return SpendingGuard(
        ledger,
        max_single=overrides.pop("max_single", D("1")),
        max_daily=overrides.pop("max_daily", D("2")),
        max_weekly=overrides.pop("max_weekly", D("5")),
        high_value_threshold=overrides.pop("high_value_threshold", D("0.8")),
        clock=clock,
        **overrides,
    )


def test_amount_equal_to_single_limit_is_allowed(
    spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]
) -> None:
    guard = _guard(spending_ledger, clock, D, high_value_threshold=D("10"))

    assert guard.authorize("tx-1", D("1")) is SpendingDecision.APPROVED
    assert guard.authorize("tx-2", D("1.000001")) is SpendingDecision.REJECTED_SINGLE_LIMIT


def test_daily_limit_counts_recorded_spend(
    spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]
) -> None:
    guard = _guard(spending_ledger, clock, D, high_value_threshold=D("10"))
    guard.record("tx-1", D("1"))
    guard.record("tx-2", D("0.7"))

    assert guard.authorize("tx-3", D("0.3")) is SpendingDecision.APPROVED
    assert guard.authorize("tx-4", D("0.31")) is SpendingDecision.REJECTED_DAILY_LIMIT


def test_daily_window_ages_out_but_weekly_does_not(
    spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]
) -> None:
    guard = _guard(spending_ledger, clock, D, high_value_threshold=D("10"))
    for day in range(2):
        guard.record(f"tx-a{day}", D("1"))
        guard.record(f"tx-b{day}", D("1"))
        clock.advance(days=1, seconds=1)
    guard.record("tx-c", D("1"))
    guard.record("tx-d", D("0.5"))

    state = guard.budget_state()
    assert state.spent_daily == D("1.5")
    assert state.spent_weekly == D("5.5")
    assert state.remaining_daily == D("0.5")
    assert state.remaining_weekly == D("0")


def test_weekly_limit_rejects_independently_of_daily(
    spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]
) -> None:
    guard = _guard(spending_ledger, clock, D, max_single=D("2"), high_value_threshold=D("10"))
    for i in range(4):
        spending_ledger.append(
            SpendRecord.create(f"old-{i}", D("1"), recorded_at=clock() - timedelta(days=2 + i))
        )

    assert guard.budget_state().spent_daily == D("0")
    assert guard.authorize("tx-1", D("1")) is SpendingDecision.APPROVED
    assert guard.authorize("tx-2", D("1.01")) is SpendingDecision.REJECTED_WEEKLY_LIMIT

    clock.advance(days=3)
    assert guard.budget_state().spent_weekly == D("2")
    assert guard.authorize("tx-3", D("2")) is SpendingDecision.APPROVED


def test_high_value_without_policy_is_allowed_by_default(
    spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]
) -> None:
    guard = _guard(spending_ledger, clock, D)

    assert guard.authorize("tx-1", D("0.8")) is SpendingDecision.APPROVED


def test_high_value_without_policy_rejected_when_disallowed(
    spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]
) -> None:
    guard = _guard(spending_ledger, clock, D, allow_high_value_without_policy=False)

    assert guard.authorize("tx-1", D("0.8")) is SpendingDecision.REJECTED_HIGH_VALUE_NOT_APPROVED
    assert guard.authorize("tx-2", D("0.79")) is SpendingDecision.APPROVED


def test_policy_decision_is_honoured(spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]) -> None:
    declining = _Policy(answer=False)
    guard = _guard(spending_ledger, clock, D, approval_policy=declining)

    assert guard.authorize("tx-1", D("0.9"), "buy card") is SpendingDecision.REJECTED_HIGH_VALUE_NOT_APPROVED
    transaction_id, amount, context = declining.calls[0]
    assert (transaction_id, amount) == ("tx-1", D("0.9"))
    assert context == ApprovalContext("buy card", D("2"), D("5"))

    approving = _Policy(answer=True)
    guard = _guard(spending_ledger, clock, D, approval_policy=approving)
    assert guard.authorize("tx-2", D("0.9")) is SpendingDecision.APPROVED


def test_policy_error_counts_as_rejection(spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]) -> None:
    guard = _guard(spending_ledger, clock, D, approval_policy=_Policy(error=RuntimeError("chat offline")))

    assert guard.authorize("tx-1", D("0.9")) is SpendingDecision.REJECTED_HIGH_VALUE_NOT_APPROVED


def test_policy_not_consulted_below_threshold(
    spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]
) -> None:
    policy = _Policy(answer=False)
    guard = _guard(spending_ledger, clock, D, approval_policy=policy)

    assert guard.authorize("tx-1", D("0.5")) is SpendingDecision.APPROVED
    assert policy.calls == []


def test_authorize_does_not_record(spending_ledger: Any, clock: Any, D: Callable[[Any], Decimal]) -> None:
    guard = _guard(spending_ledger, clock, D)

    guard.authorize("tx-1", D("0.5"))

    assert guard.budget_state().spent_daily == D("0")


def test_non_positive_amount_raises(spending_guard: SpendingGuard) -> None:
    with pytest.raises(ValueError):
        spending_guard.authorize("tx-1", Decimal("0"))

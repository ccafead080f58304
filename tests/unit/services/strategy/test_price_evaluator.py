# -*- coding: utf-8 -*-
"""Unit tests for PriceEvaluator."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest

from sorare_trading_bot.services.strategy.price_evaluator import PriceEvaluator, quantize_price


def test_price_at_exact_threshold_is_not_undervalued(D: Callable[[Any], Decimal]) -> None:
    """0.85 against a 1.000 floor sits on the threshold and must not buy."""
    evaluator = PriceEvaluator()

    assert evaluator.threshold(D("1.000")) == D("0.85")
    assert evaluator.is_undervalued(D("0.85"), D("1.000")) is False


def test_price_just_below_threshold_is_undervalued(D: Callable[[Any], Decimal]) -> None:
    evaluator = PriceEvaluator()

    assert evaluator.is_undervalued(D("0.849999"), D("1.000")) is True
    assert evaluator.is_undervalued(D("0.840"), D("1.000")) is True


def test_custom_discount_moves_threshold(D: Callable[[Any], Decimal]) -> None:
    evaluator = PriceEvaluator(D("0.10"))

    assert evaluator.is_undervalued(D("0.89"), D("1")) is True
    assert evaluator.is_undervalued(D("0.90"), D("1")) is False


@pytest.mark.parametrize(("price", "reference"), [("0", "1"), ("-0.1", "1"), ("0.5", "0")])
def test_non_positive_inputs_raise(price: str, reference: str, D: Callable[[Any], Decimal]) -> None:
    with pytest.raises(ValueError):
        PriceEvaluator().is_undervalued(D(price), D(reference))


def test_invalid_discount_fraction_rejected(D: Callable[[Any], Decimal]) -> None:
    with pytest.raises(ValueError):
        PriceEvaluator(D("1"))


def test_markup_price_rounds_half_up_to_six_decimals(D: Callable[[Any], Decimal]) -> None:
    assert PriceEvaluator.markup_price(D("0.840"), D("1.05")) == D("0.882000")
    assert PriceEvaluator.markup_price(D("0.1234565"), D("1")) == D("0.123457")
    assert quantize_price(D("0.0000005")) == D("0.000001")

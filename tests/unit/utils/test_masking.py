# -*- coding: utf-8 -*-
"""Unit tests for identifier masking."""

from __future__ import annotations

import pytest

from sorare_trading_bot.utils.masking import mask_identifier


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0x2d27b6e21b3d4d7c9a43fdf58f12345678907706", "0x2d27...7706"),
        ("john-doe-fc", "john***"),
        ("abc", "a***"),
        ("", "***"),
        (None, "***"),
        ("   ", "***"),
    ],
)
def test_mask_identifier(value: str | None, expected: str) -> None:
    assert mask_identifier(value) == expected

# -*- coding: utf-8 -*-
"""Unit tests for the logging setup."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from decimal import Decimal
from pathlib import Path

import pytest
import structlog

from sorare_trading_bot.config.config import Settings
from sorare_trading_bot.logging.config import configure_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    structlog.reset_defaults()


def test_file_output_is_json_with_exact_amounts_and_masked_seller(
    tmp_path: Path, restore_logging: None
) -> None:
    log_file = tmp_path / "logs" / "bot.log"
    settings = Settings(
        _env_file=None,
        app={"app_name": "sorare-test", "environment": "test"},
        logging={"log_to_console": False, "log_to_file": True, "log_file_path": str(log_file)},
    )

    configure_logging(settings)
    structlog.get_logger("TradeExecutor").warning(
        "special_card_found",
        price=Decimal("0.840000"),
        seller="0x2d27b6e21b3d4d7c9a43fdf58f12345678907706",
    )
    for handler in logging.getLogger().handlers:
        handler.flush()

    [line] = log_file.read_text(encoding="utf-8").splitlines()
    record = json.loads(line)
    assert record["event"] == "special_card_found"
    assert record["price"] == "0.840000"
    assert record["seller"] == "0x2d27...7706"
    assert record["logger"] == "TradeExecutor"
    assert record["level"] == "warning"
    assert (record["app_name"], record["environment"]) == ("sorare-test", "test")

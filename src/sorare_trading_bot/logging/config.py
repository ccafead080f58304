# -*- coding: utf-8 -*-
"""Logging setup: structlog on top of stdlib handlers, optionally mirrored to Logfire.

Console output is human-readable unless LOGGING__JSON_FORMAT is set; the
rotating log file is always one JSON object per line. ETH amounts are logged
as exact decimal strings and counterparty identifiers are masked.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

import logfire
import structlog
from structlog.types import EventDict, Processor

from sorare_trading_bot.config import Settings, get_settings
from sorare_trading_bot.utils.masking import mask_identifier

LOGFIRE_LEVELS: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

_MASKED_KEYS = ("seller", "counterparty")


def _service_context(settings: Settings) -> Processor:
    app = settings.app
    static: dict[str, Any] = {"app_name": app.app_name, "environment": app.environment}
    if app.service_name:
        static["service_name"] = app.service_name
    if app.service_version:
        static["service_version"] = app.service_version

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in static.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _stringify_decimals(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
    return event_dict


def _mask_counterparties(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    for key in _MASKED_KEYS:
        if isinstance(event_dict.get(key), str):
            event_dict[key] = mask_identifier(event_dict[key])
    return event_dict


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _formatter(renderer: Any) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        foreign_pre_chain=[structlog.stdlib.add_log_level, structlog.processors.TimeStamper(fmt="iso", utc=True)],
    )


def _handlers(settings: Settings) -> list[logging.Handler]:
    cfg = settings.logging
    handlers: list[logging.Handler] = []
    if cfg.log_to_console:
        console = logging.StreamHandler()
        console.setLevel(_level(cfg.console_level))
        console.setFormatter(
            _formatter(
                structlog.processors.JSONRenderer() if cfg.json_format else structlog.dev.ConsoleRenderer()
            )
        )
        handlers.append(console)
    if cfg.log_to_file:
        path = Path(cfg.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            path,
            when=cfg.log_file_when,
            interval=cfg.log_file_interval,
            backupCount=cfg.log_file_backup_count,
            encoding="utf-8",
            utc=cfg.log_file_utc,
        )
        rotating.setLevel(_level(cfg.file_level))
        rotating.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        handlers.append(rotating)
    return handlers


def configure_logging(settings: Settings | None = None) -> None:
    """Install handlers and the structlog processor chain (defaults to the cached settings)."""
    settings = settings or get_settings()
    cfg = settings.logging

    handlers = _handlers(settings)
    if handlers:
        logging.basicConfig(level=min(h.level for h in handlers), handlers=handlers, force=True)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings),
        _stringify_decimals,
        _mask_counterparties,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if cfg.logfire_enabled:
        app = settings.app
        logfire.configure(
            token=cfg.logfire_token,
            service_name=app.service_name or app.app_name,
            service_version=app.service_version,
            min_level=LOGFIRE_LEVELS.get(cfg.logfire_level, "info"),  # type: ignore[arg-type]
            environment=app.environment,
        )
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    processors.append(structlog.stdlib.ProcessorFormatter.wrap_for_formatter)
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

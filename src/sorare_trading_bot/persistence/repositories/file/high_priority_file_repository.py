# -*- coding: utf-8 -*-
"""High-priority asset list backed by a plain text file.

One ``asset_id,variant`` pair per line; blank lines and ``#`` comments are
ignored. The file may be edited by hand while the bot runs: it is re-read
whenever its modification time changes.
"""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Optional

import structlog

from sorare_trading_bot.models.listing import AssetKey
from sorare_trading_bot.persistence.repositories.interfaces.high_priority_repository import (
    IHighPriorityRepository,
)

_HEADER = (
    "# High-priority assets traded with the rolling sales average.\n"
    "# One entry per line: asset_id,variant (e.g. kylian-mbappe,limited)\n"
)


class FileHighPriorityRepository(IHighPriorityRepository):
    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = threading.Lock()
        self._entries: list[AssetKey] = []
        self._mtime: Optional[float] = None
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(_HEADER, encoding="utf-8")
            self._logger.info("high_priority_file_created", path=str(self._path))

    @property
    def path(self) -> Path:
        return self._path

    def _parse(self, text: str) -> list[AssetKey]:
        entries: list[AssetKey] = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            parts = [p.strip() for p in line.split(",")]
            if len(parts) != 2:
                self._logger.warning(
                    "high_priority_line_malformed", path=str(self._path), line=lineno, content=raw
                )
                continue
            try:
                key = AssetKey.create(parts[0], parts[1])
            except ValueError:
                self._logger.warning(
                    "high_priority_line_malformed", path=str(self._path), line=lineno, content=raw
                )
                continue
            if key not in entries:
                entries.append(key)
        return entries

    def _refresh(self) -> None:
        """Reload entries if the file changed since the last read. Caller holds the lock."""
        try:
            mtime = self._path.stat().st_mtime
        except FileNotFoundError:
            self._entries = []
            self._mtime = None
            return
        if mtime == self._mtime:
            return
        self._entries = self._parse(self._path.read_text(encoding="utf-8"))
        self._mtime = mtime
        self._logger.debug("high_priority_file_loaded", path=str(self._path), count=len(self._entries))

    def _write_atomic(self, text: str) -> None:
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        self._mtime = None

    def add(self, key: AssetKey) -> bool:
        with self._lock:
            self._refresh()
            if any(k.asset_id == key.asset_id for k in self._entries):
                return False
            text = self._path.read_text(encoding="utf-8") if self._path.exists() else _HEADER
            if text and not text.endswith("\n"):
                text += "\n"
            self._write_atomic(f"{text}{key.asset_id},{key.variant}\n")
            self._refresh()
        self._logger.info("high_priority_added", asset=str(key))
        return True

    def remove(self, asset_id: str) -> bool:
        asset_id = asset_id.strip()
        with self._lock:
            self._refresh()
            if not any(k.asset_id == asset_id for k in self._entries):
                return False
            kept: list[str] = []
            for raw in self._path.read_text(encoding="utf-8").splitlines():
                line = raw.strip()
                if line and not line.startswith("#") and line.split(",")[0].strip() == asset_id:
                    continue
                kept.append(raw)
            self._write_atomic("\n".join(kept) + "\n")
            self._refresh()
        self._logger.info("high_priority_removed", asset_id=asset_id)
        return True

    def list_all(self) -> list[AssetKey]:
        with self._lock:
            self._refresh()
            return list(self._entries)

# -*- coding: utf-8 -*-
"""Process-wide kill switch persisted as marker files.

The switch is active while EMERGENCY_STOP exists in the configured directory
(with the human-readable reason in EMERGENCY_REASON.txt). It survives restarts,
and an operator can engage it from outside the process by creating the marker
file; the watcher picks it up on its next poll.
"""

from __future__ import annotations

import asyncio
import threading
from pathlib import Path
from typing import Any, Callable, Optional

import structlog

from sorare_trading_bot.exceptions import EmergencyStopDirectoryError
from sorare_trading_bot.models.emergency_state import EmergencyState
from sorare_trading_bot.utils.clock import Clock, utc_now

STOP_FILE_NAME = "EMERGENCY_STOP"
REASON_FILE_NAME = "EMERGENCY_REASON.txt"
WRITE_CHECK_FILE_NAME = ".write_check"
REASON_PREVIOUS_RUN = "Unknown (stop file exists from previous run)"
REASON_EXTERNAL = "Unknown (external file creation)"


class EmergencyStop:
    def __init__(
        self,
        directory: str | Path,
        *,
        poll_interval_seconds: float = 5.0,
        clock: Clock = utc_now,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Create the marker directory and recover an active stop left by a previous run.

        Raises:
            EmergencyStopDirectoryError: If the directory cannot be created, written or read.
        """
        self._dir = Path(directory)
        self._stop_file = self._dir / STOP_FILE_NAME
        self._reason_file = self._dir / REASON_FILE_NAME
        self._poll_interval = poll_interval_seconds
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = threading.Lock()
        self._state = EmergencyState.inactive()
        self._watcher_task: Optional[asyncio.Task[None]] = None

        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            write_check = self._dir / WRITE_CHECK_FILE_NAME
            write_check.write_text("ok", encoding="utf-8")
            write_check.unlink()
            stop_file_present = self._stop_file.exists()
        except OSError as e:
            raise EmergencyStopDirectoryError(str(self._dir), cause=e) from e

        if stop_file_present:
            reason = self._read_reason() or REASON_PREVIOUS_RUN
            self._state = EmergencyState(active=True, reason=reason, triggered_at=self._clock())
            self._logger.critical("emergency_stop_active_on_startup", reason=reason, directory=str(self._dir))

    @property
    def directory(self) -> Path:
        return self._dir

    @property
    def state(self) -> EmergencyState:
        return self._state

    @property
    def reason(self) -> Optional[str]:
        return self._state.reason if self._state.active else None

    def is_active(self) -> bool:
        return self._state.active

    def _read_reason(self) -> Optional[str]:
        try:
            text = self._reason_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            self._logger.error("emergency_reason_read_failed", error=str(e))
            return None
        return text or None

    def trigger(self, reason: str) -> None:
        """Engage the stop. A second trigger while active keeps the first reason."""
        with self._lock:
            if self._state.active:
                return
            now = self._clock()
            self._state = EmergencyState(active=True, reason=reason, triggered_at=now)
            try:
                self._stop_file.write_text(f"EMERGENCY STOP TRIGGERED AT {now.isoformat()}\n", encoding="utf-8")
                self._reason_file.write_text(reason, encoding="utf-8")
            except OSError as e:
                # the in-memory stop stays engaged even if it could not be persisted
                self._logger.error("emergency_stop_files_write_failed", error=str(e))
        self._logger.critical("emergency_stop_triggered", reason=reason)

    def clear(self, force: bool = False) -> bool:
        """Disengage the stop.

        Returns True when the stop is (now) inactive. While a marker or reason
        file is still present, only force=True deletes them and clears.
        """
        with self._lock:
            if not self._state.active:
                return True
            files_exist = self._stop_file.exists() or self._reason_file.exists()
            if files_exist and not force:
                self._logger.warning("emergency_stop_clear_refused", reason="marker files still exist")
                return False
            try:
                self._stop_file.unlink(missing_ok=True)
                self._reason_file.unlink(missing_ok=True)
            except OSError as e:
                self._logger.error("emergency_stop_files_delete_failed", error=str(e))
                return False
            self._state = EmergencyState.inactive()
        self._logger.info("emergency_stop_cleared", forced=force)
        return True

    def check_marker(self) -> bool:
        """Poll the marker once. Engage the stop if the file appeared externally. Return is_active()."""
        if not self._state.active and self._stop_file.exists():
            self.trigger(self._read_reason() or REASON_EXTERNAL)
        return self._state.active

    async def _watch(self) -> None:
        self._logger.info("emergency_watcher_started", poll_interval_seconds=self._poll_interval)
        while True:
            try:
                self.check_marker()
            except Exception:
                self._logger.exception("emergency_watcher_check_failed")
            await asyncio.sleep(self._poll_interval)

    def start_watcher(self) -> None:
        """Start the polling task on the running loop (no-op if already running)."""
        if self._watcher_task is not None and not self._watcher_task.done():
            return
        self._watcher_task = asyncio.create_task(self._watch(), name="emergency-stop-watcher")

    async def stop_watcher(self) -> None:
        task, self._watcher_task = self._watcher_task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._logger.info("emergency_watcher_stopped")

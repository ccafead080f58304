"""EmergencyState: snapshot of the process-wide kill switch."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class EmergencyState:
    active: bool
    reason: Optional[str] = None
    triggered_at: Optional[datetime] = None

    @classmethod
    def inactive(cls) -> EmergencyState:
        return cls(active=False)

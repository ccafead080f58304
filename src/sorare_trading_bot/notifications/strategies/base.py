# -*- coding: utf-8 -*-
"""Base notification strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from sorare_trading_bot.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from sorare_trading_bot.config.config import Settings


class BaseNotificationStrategy(ABC):
    """One delivery channel (console, Telegram)."""

    def __init__(self, settings: "Settings"):
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        pass

    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def send_notification(self, message: NotificationMessage) -> None:
        """Deliver message on this channel."""
        pass

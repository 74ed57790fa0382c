# -*- coding: utf-8 -*-
"""Base notification channel."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from tradebell.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from tradebell.config.config import Settings


class BaseNotificationStrategy(ABC):
    """A destination for notifications (Telegram chat, stdout)."""

    channel_name: str = "base"

    def __init__(self, settings: "Settings"):
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """True between initialize() and shutdown()."""

    @abstractmethod
    async def initialize(self) -> None: ...

    @abstractmethod
    async def shutdown(self) -> None: ...

    @abstractmethod
    async def send_notification(self, message: NotificationMessage) -> None:
        """Deliver one message. Returning normally means the channel accepted it.

        Raises:
            TransientSendError: Delivery kept failing until the retry ceiling.
            FatalSendError: The channel rejected the message or is not running.
        """

"""Notification dispatcher: delivers one message and reports whether it arrived."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from tradebell.exceptions import FatalSendError, NotificationError
from tradebell.notifications.strategies import BaseNotificationStrategy
from tradebell.notifications.types import NotificationMessage


@dataclass
class NotificationDispatcher:
    """Send notifications to all configured channels and wait for confirmation.

    send() returns only when every channel accepted the message, so callers can
    record the trade as reported afterwards.
    """

    notifiers: list[BaseNotificationStrategy]
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationDispatcher")

    async def initialize(self) -> None:
        """Initialize all notifiers."""
        self._logger.debug(
            "notification_init_started",
            notification_notifiers_count=len(self.notifiers),
        )
        for notifier in self.notifiers:
            await notifier.initialize()
        if not self.notifiers:
            self._logger.warning("notification_init_no_notifiers")

    async def shutdown(self) -> None:
        """Shutdown all notifiers."""
        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_shutdown_complete")

    async def send(self, message: NotificationMessage) -> None:
        """Deliver a message through every channel.

        Raises:
            NotificationError: TransientSendError when retries were exhausted,
                FatalSendError when a channel rejected the message or none is configured.
        """
        if not self.notifiers:
            raise FatalSendError("no notification channel configured")
        for notifier in self.notifiers:
            try:
                await notifier.send_notification(message)
            except NotificationError as e:
                self._logger.warning(
                    "notification_channel_failed",
                    notification_channel=notifier.channel_name,
                    notification_event_type=message.event_type,
                    account_name=message.account,
                    error_type=type(e).__name__,
                )
                raise
            self._logger.debug(
                "notification_delivered",
                notification_channel=notifier.channel_name,
                notification_event_type=message.event_type,
                account_name=message.account,
            )

    async def notify_best_effort(self, message: NotificationMessage) -> bool:
        """Deliver a message whose loss is acceptable (system and warning events).

        Returns:
            True if delivered; failures are logged, never raised.
        """
        try:
            await self.send(message)
        except NotificationError as e:
            self._logger.warning(
                "notification_best_effort_failed",
                notification_event_type=message.event_type,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False
        return True

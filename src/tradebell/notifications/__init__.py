"""Notification subsystem."""

from tradebell.notifications.dispatcher import NotificationDispatcher
from tradebell.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from tradebell.notifications.types import (
    NotificationMessage,
    NotificationStyler,
)

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
    "NotificationDispatcher",
    "NotificationMessage",
    "NotificationStyler",
]

"""Notification strategies."""

from tradebell.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from tradebell.notifications.strategies.console import ConsoleNotifier
from tradebell.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]

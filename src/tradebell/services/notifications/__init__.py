"""Notification-related services (trade completed)."""

from tradebell.services.notifications.trade_completed_notifier import (
    TradeCompletedNotifier,
    build_trade_message,
    unresolved_count,
)

__all__ = ["TradeCompletedNotifier", "build_trade_message", "unresolved_count"]

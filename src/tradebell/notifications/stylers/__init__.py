"""Notification stylers."""

from tradebell.notifications.stylers.notification_styler import EventNotificationStyler

__all__ = ["EventNotificationStyler"]

"""Configuration subpackage."""

from tradebell.config.config import (
    AccountSettings,
    ApiSettings,
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    Settings,
    TelegramNotificationSettings,
    TrackingSettings,
    get_settings,
)

__all__ = [
    "AccountSettings",
    "ApiSettings",
    "AppSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "Settings",
    "TelegramNotificationSettings",
    "TrackingSettings",
    "get_settings",
]

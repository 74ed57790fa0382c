"""Exceptions subpackage."""

from tradebell.exceptions.exceptions import (
    FatalAPIError,
    FatalSendError,
    MissingRequiredConfigError,
    NotificationError,
    RateLimitError,
    SteamAPIError,
    StorageCorruptedError,
    TradebellError,
    TransientAPIError,
    TransientSendError,
)

__all__ = [
    "FatalAPIError",
    "FatalSendError",
    "MissingRequiredConfigError",
    "NotificationError",
    "RateLimitError",
    "SteamAPIError",
    "StorageCorruptedError",
    "TradebellError",
    "TransientAPIError",
    "TransientSendError",
]

"""Custom exceptions for the Steam API, notifications and local storage."""

from __future__ import annotations


class TradebellError(Exception):
    """Base exception for tradebell errors."""

    pass


class MissingRequiredConfigError(TradebellError):
    """Raised when a required configuration value is missing."""

    pass


class StorageCorruptedError(TradebellError):
    """Raised when a persisted state file cannot be parsed."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class SteamAPIError(TradebellError):
    """Raised when a Steam Web API request fails."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(SteamAPIError):
    """Raised when the API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class TransientAPIError(SteamAPIError):
    """Timeouts, connection errors, 5xx and malformed bodies. Retry on the next tick."""

    pass


class FatalAPIError(SteamAPIError):
    """Authentication failure or malformed request. Retrying will not help."""

    pass


class NotificationError(TradebellError):
    """Raised when a notification could not be delivered."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TransientSendError(NotificationError):
    """Delivery failed after exhausting the retry ceiling."""

    pass


class FatalSendError(NotificationError):
    """Delivery was rejected (bad chat id, bot blocked, malformed message)."""

    pass

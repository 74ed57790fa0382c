"""Notification message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class NotificationMessage:
    """One event to deliver: a completed trade, a disabled account or a lifecycle notice."""

    event_type: str
    message: str
    title: str | None = None
    payload: dict[str, Any] | None = None
    account: str | None = None
    """Watched account the event belongs to; None for process-wide events."""


class NotificationStyler(Protocol):
    """Turns a NotificationMessage into the text a channel sends."""

    def render(self, message: NotificationMessage) -> str:
        """Return Telegram-compatible HTML for the message."""
        ...

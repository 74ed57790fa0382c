# -*- coding: utf-8 -*-
"""Console channel for dry runs: writes rendered messages to a text stream."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional, TextIO

from tradebell.exceptions import FatalSendError
from tradebell.notifications.types import NotificationMessage
from tradebell.notifications.strategies.base import BaseNotificationStrategy
from tradebell.config import Settings

if TYPE_CHECKING:  # pragma: no cover
    from tradebell.notifications.types import NotificationStyler


class ConsoleNotifier(BaseNotificationStrategy):
    """Write notifications to stdout (or an injected stream), one block per message."""

    channel_name = "console"

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(settings)
        self._styler = styler
        self._stream = stream
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running:
            raise FatalSendError("console notifier is not running")
        stream = self._stream or sys.stdout
        stream.write(self._styler.render(message) + "\n\n")
        stream.flush()

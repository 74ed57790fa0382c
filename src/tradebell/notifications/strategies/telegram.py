# -*- coding: utf-8 -*-
"""Telegram notification strategy (async)."""

from __future__ import annotations

import asyncio
import time
from datetime import timedelta
import structlog
from typing import Any, Awaitable, Callable, Optional, TYPE_CHECKING

from telegram import Bot
from telegram.error import (
    BadRequest,
    Forbidden,
    NetworkError,
    RetryAfter,
    TelegramError,
    TimedOut,
)
from telegram.request import HTTPXRequest

from tradebell.exceptions import FatalSendError, TransientSendError
from tradebell.notifications.types import NotificationMessage
from tradebell.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:
    from tradebell.config.config import Settings
    from tradebell.notifications.types import NotificationStyler


def _retry_after_seconds(value: Any) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    try:
        return float(value)
    except (TypeError, ValueError):
        return 1.0


class TelegramNotifier(BaseNotificationStrategy):
    """Send notifications to one Telegram chat using python-telegram-bot.

    Transient failures are retried with bounded exponential backoff up to
    telegram.max_attempts; BadRequest/Forbidden fail immediately.
    """

    channel_name = "telegram"

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._styler: "NotificationStyler" = styler
        self._sleep = sleep

        cfg = self.settings.telegram
        token = cfg.token.get_secret_value() if cfg.token is not None else None
        chat_id = cfg.chat_id
        if not cfg.enabled or not token or not chat_id:
            raise ValueError("TelegramNotifier requires token and chat_id.")

        self.token: str = token
        self.chat_id: str = str(chat_id)
        self.messages_per_minute = cfg.messages_per_minute
        self.max_attempts = cfg.max_attempts
        self.backoff_base_seconds = cfg.backoff_base_seconds

        self.connect_timeout = cfg.connect_timeout
        self.read_timeout = cfg.read_timeout
        self.write_timeout = cfg.write_timeout
        self.pool_timeout = cfg.pool_timeout

        self._bot: Optional[Bot] = None
        self._running = False
        self._message_timestamps: list[float] = []

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            self._logger.warning("telegram_already_running")
            return

        request = HTTPXRequest(
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            write_timeout=self.write_timeout,
            pool_timeout=self.pool_timeout,
        )
        self._bot = Bot(token=self.token, request=request)
        self._running = True

    async def shutdown(self) -> None:
        if not self._running:
            return

        self._bot = None
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running or self._bot is None:
            raise FatalSendError("telegram notifier is not running")

        formatted = self._styler.render(message)
        await self._send_message(self._bot, formatted)

    def _backoff(self, attempt: int) -> float:
        return min(60.0, self.backoff_base_seconds * (2 ** (attempt - 1)))

    async def _send_message(self, bot: Bot, message: str) -> None:
        await self._apply_rate_limit()
        last_error: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                await bot.send_message(
                    chat_id=self.chat_id,
                    text=message,
                    parse_mode="HTML",
                )
                self._message_timestamps.append(time.monotonic())
                return
            except RetryAfter as exc:
                last_error = exc
                delay = _retry_after_seconds(exc.retry_after)
                self._logger.warning(
                    "telegram_rate_limit_retry_after",
                    retry_seconds=delay,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                )
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_fatal_error",
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                raise FatalSendError(f"Telegram rejected the message: {exc}", cause=exc) from exc
            except (NetworkError, TimedOut, TelegramError) as exc:
                last_error = exc
                delay = self._backoff(attempt)
                self._logger.warning(
                    "telegram_send_retry",
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    backoff_seconds=delay,
                )
            if attempt < self.max_attempts:
                await self._sleep(delay)

        self._logger.error(
            "telegram_max_attempts_exceeded",
            max_attempts=self.max_attempts,
            error_type=type(last_error).__name__ if last_error else None,
        )
        raise TransientSendError(
            f"Telegram delivery failed after {self.max_attempts} attempts",
            cause=last_error,
        )

    async def _apply_rate_limit(self) -> None:
        if self.messages_per_minute <= 0:
            return

        now = time.monotonic()
        window_start = now - 60
        self._message_timestamps = [t for t in self._message_timestamps if t >= window_start]
        if len(self._message_timestamps) >= self.messages_per_minute:
            sleep_time = 60 - (now - self._message_timestamps[0])
            if sleep_time > 0:
                self._logger.debug("telegram_rate_limit_wait", wait_seconds=sleep_time)
                await self._sleep(sleep_time)

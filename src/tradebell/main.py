# -*- coding: utf-8 -*-
"""
Entry point for tradebell.

Orchestrates: settings, logging, container, notifiers, one poller per account,
shutdown (SIGINT/SIGTERM or CancelledError).
Trades flow: poller -> Steam API -> trade state diff -> item cache -> Telegram.

Run with: tradebell  (or python -m tradebell.main)
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from typing import Any

from tradebell.DI import Container
from tradebell.config import Settings, get_settings
from tradebell.exceptions import MissingRequiredConfigError, StorageCorruptedError
from tradebell.logging.config import configure_logging
from tradebell.notifications.types import NotificationMessage


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


def _check_required(settings: Settings) -> None:
    if not settings.accounts:
        raise MissingRequiredConfigError("accounts")
    if not settings.telegram.enabled and not settings.console.enabled:
        raise MissingRequiredConfigError("telegram (or CONSOLE__ENABLED for a dry run)")


async def _do_shutdown(logger: Any) -> None:
    """Clean shutdown. Safe to call on normal shutdown or CancelledError."""
    logger.info("main_shutdown_complete")


async def run() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger("main")
    try:
        _check_required(settings)
    except MissingRequiredConfigError as e:
        logger.error("main_missing_required_config", missing=str(e))
        raise

    container = Container()
    container.config.override(settings)
    dispatcher = container.notification_dispatcher()
    try:
        runner = container.polling_runner()
    except StorageCorruptedError as e:
        logger.error("main_state_file_corrupted", state_path=e.path, error_message=str(e))
        raise
    http_client = container.http_client()
    await dispatcher.initialize()
    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)

    account_names = [a.name for a in container.accounts()]
    logger.info(
        "main_polling_started",
        accounts=account_names,
        poll_interval_seconds=settings.tracking.polling_interval_seconds,
    )
    await dispatcher.notify_best_effort(
        NotificationMessage(
            event_type="system_started",
            message=f"Watching {len(account_names)} account(s)",
            payload={"accounts": account_names},
        )
    )

    try:
        try:
            await runner.run(shutdown_event)
        except asyncio.CancelledError:
            await _do_shutdown(logger)
            raise

        await _do_shutdown(logger)
    finally:
        await dispatcher.notify_best_effort(
            NotificationMessage(
                event_type="system_stopped",
                message="Trade watcher stopped",
                payload={},
            )
        )
        await dispatcher.shutdown()
        await http_client.aclose()


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()

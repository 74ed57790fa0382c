# -*- coding: utf-8 -*-
"""Orchestrator: runs one AccountPoller per account until shutdown (signal or CancelledError)."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

import structlog

from tradebell.models import Account
from tradebell.services.polling.account_poller import AccountPoller


class PollingRunner:
    """Runs poller.run() for each account concurrently until shutdown_event or CancelledError.

    Accounts share nothing but the item cache, so a slow or rate-limited account
    never delays the others.
    """

    def __init__(
        self,
        accounts: Sequence[Account],
        poller_factory: Callable[..., AccountPoller],
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            accounts: Accounts to poll.
            poller_factory: Builds an AccountPoller, called as poller_factory(account=...).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._pollers = [poller_factory(account=account) for account in accounts]
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def pollers(self) -> list[AccountPoller]:
        return list(self._pollers)

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """Start one task per account; wait for shutdown_event; let each finish its current step.

        Args:
            shutdown_event: When set, pollers stop after their current step and this returns.
        """
        self._logger.info("polling_runner_started", accounts_count=len(self._pollers))
        tasks = [
            asyncio.create_task(poller.run(shutdown_event), name=f"poller:{poller.account.name}")
            for poller in self._pollers
        ]

        try:
            await shutdown_event.wait()
        except asyncio.CancelledError:
            self._logger.info(
                "polling_runner_shutdown_cancelled",
                message="Task cancelled; stopping pollers",
            )
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        self._logger.info("polling_runner_shutdown_started")
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for poller, result in zip(self._pollers, results):
            if isinstance(result, BaseException):
                self._logger.error(
                    "polling_runner_poller_failed",
                    account_name=poller.account.name,
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
        self._logger.info("polling_runner_shutdown_complete")

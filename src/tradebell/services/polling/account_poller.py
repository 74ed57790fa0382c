"""Per-account poll cycle: fetch, diff, enrich, notify, then sleep."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars

from tradebell.exceptions import (
    FatalAPIError,
    NotificationError,
    RateLimitError,
    SteamAPIError,
)
from tradebell.models import Account, ItemResolution
from tradebell.notifications.types import NotificationMessage
from tradebell.services.polling.cycle import CycleOutcome, CycleStatus, PollState

if TYPE_CHECKING:
    from tradebell.clients.steam_api import SteamApiClient
    from tradebell.notifications.dispatcher import NotificationDispatcher
    from tradebell.services.item_cache import ItemCache
    from tradebell.services.notifications import TradeCompletedNotifier
    from tradebell.services.trade_state import TradeStateTracker


class AccountPoller:
    """Polls one account's trade offers and reports newly completed trades.

    Cycles of one poller never overlap. A trade is marked as seen only after its
    notification was delivered; a failed delivery is retried on the next cycle.
    """

    def __init__(
        self,
        account: Account,
        steam_client: SteamApiClient,
        tracker: TradeStateTracker,
        item_cache: ItemCache,
        trade_notifier: TradeCompletedNotifier,
        dispatcher: NotificationDispatcher,
        *,
        polling_interval_seconds: float,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            account: Account to poll.
            steam_client: Steam API gateway (injected).
            tracker: Seen trade state (injected).
            item_cache: Shared item description cache (injected).
            trade_notifier: Sends trade_completed notifications (injected).
            dispatcher: Used for the best-effort account_disabled warning.
            polling_interval_seconds: Delay between two cycles.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        if polling_interval_seconds <= 0:
            raise ValueError("polling_interval_seconds must be positive")
        self._account = account
        self._steam = steam_client
        self._tracker = tracker
        self._item_cache = item_cache
        self._trade_notifier = trade_notifier
        self._dispatcher = dispatcher
        self._interval = float(polling_interval_seconds)
        self._state = PollState.IDLE
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def account(self) -> Account:
        return self._account

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def disabled(self) -> bool:
        return self._state is PollState.DISABLED

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """Run cycles until shutdown_event is set or the account gets disabled.

        The sleep between cycles is interrupted by shutdown_event; a running cycle
        is not, so state files are never left half-written.
        """
        with bound_contextvars(account_name=self._account.name):
            self._logger.info("poller_started", poll_interval_seconds=self._interval)
            while not shutdown_event.is_set() and not self.disabled:
                try:
                    outcome = await self.run_cycle(shutdown_event)
                except Exception as e:
                    self._state = PollState.IDLE
                    self._logger.exception(
                        "poll_cycle_exception",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    outcome = CycleOutcome(status=CycleStatus.ERROR, next_delay=self._interval)
                if outcome.next_delay is None:
                    break
                if await self._wait(shutdown_event, outcome.next_delay):
                    break
            self._logger.info("poller_stopped", poll_state=self._state.value)

    @staticmethod
    async def _wait(shutdown_event: asyncio.Event, delay: float) -> bool:
        """Sleep for delay seconds; return True early if shutdown was requested."""
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    async def run_cycle(self, shutdown_event: asyncio.Event | None = None) -> CycleOutcome:
        """Run one Fetching -> Diffing -> Enriching -> Notifying cycle.

        Returns:
            What the cycle did and how long to wait before the next one.
        """
        name = self._account.name
        if self.disabled:
            return CycleOutcome(status=CycleStatus.DISABLED, next_delay=None)

        self._state = PollState.FETCHING
        try:
            offers = await self._steam.fetch_trade_offers(self._account)
        except RateLimitError as e:
            self._state = PollState.IDLE
            delay = max(self._interval, e.retry_after or 0.0)
            self._logger.warning(
                "poll_rate_limited",
                retry_after_seconds=e.retry_after,
                next_attempt_seconds=delay,
            )
            return CycleOutcome(
                status=CycleStatus.RATE_LIMITED,
                next_delay=delay,
                errors={"fetch": str(e)},
            )
        except FatalAPIError as e:
            await self._disable(e)
            return CycleOutcome(
                status=CycleStatus.DISABLED,
                next_delay=None,
                errors={"fetch": str(e)},
            )
        except SteamAPIError as e:
            self._state = PollState.IDLE
            self._logger.warning(
                "poll_fetch_failed",
                error_type=type(e).__name__,
                error_message=str(e),
                http_status_code=e.status_code,
            )
            return CycleOutcome(
                status=CycleStatus.TRANSIENT_ERROR,
                next_delay=self._interval,
                errors={"fetch": str(e)},
            )

        self._state = PollState.DIFFING
        if await self._tracker.is_cold_start(name):
            seeded = await self._tracker.seed(name, offers)
            self._state = PollState.IDLE
            return CycleOutcome(
                status=CycleStatus.SEEDED,
                next_delay=self._interval,
                offers_count=len(offers),
                seeded=tuple(seeded),
            )
        new_trades = await self._tracker.filter_new_completed(name, offers)
        if not new_trades:
            self._state = PollState.IDLE
            return CycleOutcome(
                status=CycleStatus.OK,
                next_delay=self._interval,
                offers_count=len(offers),
            )

        self._state = PollState.ENRICHING
        resolution: ItemResolution = await self._item_cache.resolve(
            (item for offer in new_trades for item in offer.items),
            account=self._account,
        )

        self._state = PollState.NOTIFYING
        notified: list[str] = []
        failed: list[str] = []
        errors: dict[str, str] = {}
        status = CycleStatus.OK
        for offer in new_trades:
            if shutdown_event is not None and shutdown_event.is_set():
                status = CycleStatus.INTERRUPTED
                self._logger.info(
                    "poll_notifying_interrupted",
                    pending_count=len(new_trades) - len(notified) - len(failed),
                )
                break
            with bound_contextvars(trade_id=offer.trade_id):
                self._logger.info("poll_new_completed_trade")
                try:
                    await self._trade_notifier.notify(offer, resolution)
                except NotificationError as e:
                    failed.append(offer.trade_id)
                    errors[offer.trade_id] = str(e)
                    self._logger.error(
                        "trade_notification_failed",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    continue
                try:
                    await self._tracker.mark_notified(name, offer.trade_id)
                except OSError as e:
                    errors[offer.trade_id] = str(e)
                    self._logger.error(
                        "trade_state_persist_failed",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                notified.append(offer.trade_id)

        self._state = PollState.IDLE
        return CycleOutcome(
            status=status,
            next_delay=self._interval,
            offers_count=len(offers),
            notified=tuple(notified),
            failed=tuple(failed),
            unresolved_items=len(resolution.missing),
            errors=errors,
        )

    async def _disable(self, error: FatalAPIError) -> None:
        self._state = PollState.DISABLED
        self._logger.error(
            "poll_account_disabled",
            error_type=type(error).__name__,
            error_message=str(error),
            http_status_code=error.status_code,
        )
        await self._dispatcher.notify_best_effort(
            NotificationMessage(
                event_type="account_disabled",
                message="Steam rejected the API key; polling stopped for this run",
                payload={"account": self._account.name, "reason": str(error)},
                account=self._account.name,
            )
        )

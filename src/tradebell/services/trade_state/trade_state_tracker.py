"""Trade state tracker: which completed trades of an account were already reported."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

import structlog

from tradebell.models import SeenTrade, TradeOffer

if TYPE_CHECKING:
    from tradebell.persistence.repositories.interfaces import ISeenTradeRepository


class TradeStateTracker:
    """Diffs fetched offers against the persisted set of seen trade ids.

    A trade id enters the set only through seed() on an account's first
    successful poll, or through mark_notified() after confirmed delivery.
    """

    def __init__(
        self,
        seen_trade_repository: ISeenTradeRepository,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._seen_repo = seen_trade_repository
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def is_cold_start(self, account: str) -> bool:
        """True when the account has never been seeded."""
        return not await self._seen_repo.has_account(account)

    async def seed(self, account: str, offers: Sequence[TradeOffer]) -> list[str]:
        """Mark every completed offer as seen without notifying.

        Historical trades that completed before the account was first watched are
        never announced. The account is registered even when nothing completed.

        Returns:
            The seeded trade ids.
        """
        trade_ids = sorted({o.trade_id for o in offers if o.is_completed})
        await self._seen_repo.seed(account, [SeenTrade.create(account, tid) for tid in trade_ids])
        self._logger.info(
            "trade_state_seeded",
            account_name=account,
            trade_state_seeded_count=len(trade_ids),
        )
        return trade_ids

    async def filter_new_completed(
        self,
        account: str,
        offers: Sequence[TradeOffer],
    ) -> list[TradeOffer]:
        """Return completed offers not yet seen, oldest first, one per trade id."""
        new: dict[str, TradeOffer] = {}
        for offer in offers:
            if not offer.is_completed or offer.trade_id in new:
                continue
            if await self._seen_repo.contains(account, offer.trade_id):
                continue
            new[offer.trade_id] = offer
        return sorted(new.values(), key=lambda o: (o.timestamp, o.trade_id))

    async def mark_notified(self, account: str, trade_id: str) -> None:
        """Record a trade as reported. Call only after delivery was confirmed."""
        await self._seen_repo.add(SeenTrade.create(account, trade_id))
        self._logger.debug("trade_state_marked", account_name=account, trade_id=trade_id)

"""TradeCompletedNotifier: builds and sends the notification for a completed trade."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from tradebell.models import ItemResolution, TradeOffer
from tradebell.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from tradebell.notifications.dispatcher import NotificationDispatcher


def unresolved_count(offer: TradeOffer, resolution: ItemResolution) -> int:
    """Number of this offer's items rendered with the placeholder name."""
    return sum(1 for item in offer.items if item in resolution.missing)


def build_trade_message(offer: TradeOffer, resolution: ItemResolution) -> NotificationMessage:
    """Build the trade_completed message rendered by EventNotificationStyler._render_trade."""
    trade_payload: dict[str, Any] = {
        "trade_id": offer.trade_id,
        "partner_account_id": offer.partner_account_id,
        "time_updated": int(offer.timestamp.timestamp()),
        "is_our_offer": offer.is_our_offer,
        "message": offer.message,
    }
    return NotificationMessage(
        event_type="trade_completed",
        message=f"Trade {offer.trade_id} completed",
        account=offer.account,
        payload={
            "account": offer.account,
            "trade": trade_payload,
            "items_received": [resolution.name_for(i) for i in offer.items_received],
            "items_given": [resolution.name_for(i) for i in offer.items_given],
            "unresolved_count": unresolved_count(offer, resolution),
        },
    )


class TradeCompletedNotifier:
    """Sends trade_completed notifications via NotificationDispatcher and waits for delivery."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def notify(self, offer: TradeOffer, resolution: ItemResolution) -> None:
        """Deliver the notification for one completed trade.

        Raises:
            NotificationError: If delivery was not confirmed.
        """
        await self._dispatcher.send(build_trade_message(offer, resolution))
        self._logger.info(
            "trade_completed_notified",
            account_name=offer.account,
            trade_id=offer.trade_id,
            items_received_count=len(offer.items_received),
            items_given_count=len(offer.items_given),
            items_unresolved_count=unresolved_count(offer, resolution),
        )

"""TradeOffer: one trade offer returned by IEconService/GetTradeOffers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import IntEnum
from typing import Any, Mapping

from tradebell.models.item import ItemRef


class TradeOfferState(IntEnum):
    """Steam ETradeOfferState."""

    INVALID = 1
    ACTIVE = 2
    ACCEPTED = 3
    """Items were exchanged. The only state treated as completed."""
    COUNTERED = 4
    EXPIRED = 5
    CANCELED = 6
    DECLINED = 7
    INVALID_ITEMS = 8
    CREATED_NEEDS_CONFIRMATION = 9
    CANCELED_BY_SECOND_FACTOR = 10
    IN_ESCROW = 11
    UNKNOWN = 0

    @classmethod
    def parse(cls, value: Any) -> TradeOfferState:
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.UNKNOWN


def _timestamp(value: Any) -> datetime:
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return datetime.fromtimestamp(0, tz=UTC)


def _items(raw: Any) -> tuple[ItemRef, ...]:
    if not isinstance(raw, list):
        return ()
    items: list[ItemRef] = []
    for asset in raw:
        if isinstance(asset, dict) and "appid" in asset and "classid" in asset:
            items.append(ItemRef.from_response(asset))
    return tuple(items)


@dataclass(frozen=True, slots=True)
class TradeOffer:
    """A trade offer seen from one account's point of view. Ephemeral per poll cycle."""

    trade_id: str
    account: str
    """Name of the watched account the offer belongs to."""
    state: TradeOfferState
    items_given: tuple[ItemRef, ...] = ()
    """items_to_give: leave the watched account."""
    items_received: tuple[ItemRef, ...] = ()
    """items_to_receive: arrive in the watched account."""
    time_created: datetime | None = None
    time_updated: datetime | None = None
    partner_account_id: int | None = None
    message: str | None = None
    is_our_offer: bool = False

    @property
    def is_completed(self) -> bool:
        return self.state is TradeOfferState.ACCEPTED

    @property
    def timestamp(self) -> datetime:
        return self.time_updated or self.time_created or datetime.fromtimestamp(0, tz=UTC)

    @property
    def items(self) -> tuple[ItemRef, ...]:
        return self.items_given + self.items_received

    @classmethod
    def from_response(cls, account: str, response: Mapping[str, Any]) -> TradeOffer:
        """Build from a raw CEcon_TradeOffer dict.

        Raises:
            ValueError: If tradeofferid is missing.
        """
        trade_id = response.get("tradeofferid")
        if trade_id is None or str(trade_id) == "":
            raise ValueError("trade offer has no tradeofferid")
        partner = response.get("accountid_other")
        message = response.get("message")
        return cls(
            trade_id=str(trade_id),
            account=account,
            state=TradeOfferState.parse(response.get("trade_offer_state")),
            items_given=_items(response.get("items_to_give")),
            items_received=_items(response.get("items_to_receive")),
            time_created=_timestamp(response.get("time_created")),
            time_updated=_timestamp(response.get("time_updated")),
            partner_account_id=int(partner) if partner is not None else None,
            message=message or None,
            is_our_offer=bool(response.get("is_our_offer", False)),
        )

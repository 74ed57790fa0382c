# -*- coding: utf-8 -*-
"""Domain models."""

from tradebell.models.account import Account
from tradebell.models.item import (
    UNKNOWN_ITEM_NAME,
    ItemDescription,
    ItemRef,
    ItemResolution,
)
from tradebell.models.seen_trade import SeenTrade
from tradebell.models.trade_offer import TradeOffer, TradeOfferState

__all__ = [
    "Account",
    "ItemDescription",
    "ItemRef",
    "ItemResolution",
    "SeenTrade",
    "TradeOffer",
    "TradeOfferState",
    "UNKNOWN_ITEM_NAME",
]

# -*- coding: utf-8 -*-
"""Application services."""

from tradebell.services.item_cache import ItemCache
from tradebell.services.notifications import TradeCompletedNotifier
from tradebell.services.polling import (
    AccountPoller,
    CycleOutcome,
    CycleStatus,
    PollingRunner,
    PollState,
)
from tradebell.services.trade_state import TradeStateTracker

__all__ = [
    "AccountPoller",
    "CycleOutcome",
    "CycleStatus",
    "ItemCache",
    "PollState",
    "PollingRunner",
    "TradeCompletedNotifier",
    "TradeStateTracker",
]

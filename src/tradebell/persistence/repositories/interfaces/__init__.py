# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/ and json_file/."""

from tradebell.persistence.repositories.interfaces.item_description_repository import (
    IItemDescriptionRepository,
)
from tradebell.persistence.repositories.interfaces.seen_trade_repository import (
    ISeenTradeRepository,
)

__all__ = [
    "IItemDescriptionRepository",
    "ISeenTradeRepository",
]

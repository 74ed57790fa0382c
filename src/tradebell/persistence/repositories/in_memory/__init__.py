"""In-memory repository implementations."""

from tradebell.persistence.repositories.in_memory.item_description_repository import (
    InMemoryItemDescriptionRepository,
)
from tradebell.persistence.repositories.in_memory.seen_trade_repository import (
    InMemorySeenTradeRepository,
)

__all__ = [
    "InMemoryItemDescriptionRepository",
    "InMemorySeenTradeRepository",
]

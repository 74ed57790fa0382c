"""JSON file repository implementations."""

from tradebell.persistence.repositories.json_file.item_description_repository import (
    JsonFileItemDescriptionRepository,
)
from tradebell.persistence.repositories.json_file.seen_trade_repository import (
    JsonFileSeenTradeRepository,
)

__all__ = [
    "JsonFileItemDescriptionRepository",
    "JsonFileSeenTradeRepository",
]

"""Persistence layer (repositories, JSON snapshot files)."""

from tradebell.persistence.repositories import (
    IItemDescriptionRepository,
    InMemoryItemDescriptionRepository,
    InMemorySeenTradeRepository,
    ISeenTradeRepository,
    JsonFileItemDescriptionRepository,
    JsonFileSeenTradeRepository,
)

__all__ = [
    "IItemDescriptionRepository",
    "ISeenTradeRepository",
    "InMemoryItemDescriptionRepository",
    "InMemorySeenTradeRepository",
    "JsonFileItemDescriptionRepository",
    "JsonFileSeenTradeRepository",
]

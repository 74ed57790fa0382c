# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, json_file)."""

from tradebell.persistence.repositories.interfaces import (
    IItemDescriptionRepository,
    ISeenTradeRepository,
)
from tradebell.persistence.repositories.in_memory import (
    InMemoryItemDescriptionRepository,
    InMemorySeenTradeRepository,
)
from tradebell.persistence.repositories.json_file import (
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

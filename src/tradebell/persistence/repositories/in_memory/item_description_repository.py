# -*- coding: utf-8 -*-
"""In-memory item description repository."""

from __future__ import annotations

from collections.abc import Mapping

from tradebell.models.item import ItemDescription, ItemRef
from tradebell.persistence.repositories.interfaces.item_description_repository import (
    IItemDescriptionRepository,
)


class InMemoryItemDescriptionRepository(IItemDescriptionRepository):
    """In-memory implementation of IItemDescriptionRepository."""

    def __init__(self, initial: Mapping[ItemRef, ItemDescription] | None = None) -> None:
        self._store: dict[ItemRef, ItemDescription] = dict(initial or {})

    def get(self, item: ItemRef) -> ItemDescription | None:
        return self._store.get(item)

    async def put_many(self, descriptions: Mapping[ItemRef, ItemDescription]) -> None:
        for item, description in descriptions.items():
            self._store.setdefault(item, description)

    def __len__(self) -> int:
        return len(self._store)

"""Abstract interface for item description storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from tradebell.models.item import ItemDescription, ItemRef


class IItemDescriptionRepository(ABC):
    """Key-value store ItemRef -> ItemDescription. Entries are never removed."""

    @abstractmethod
    def get(self, item: ItemRef) -> ItemDescription | None:
        """Return the stored description, or None."""
        ...

    @abstractmethod
    async def put_many(self, descriptions: Mapping[ItemRef, ItemDescription]) -> None:
        """Store descriptions. Existing entries are left untouched.

        Raises:
            OSError: If a persistent store could not be written.
        """
        ...

    @abstractmethod
    def __len__(self) -> int: ...

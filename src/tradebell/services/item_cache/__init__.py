"""Item description cache."""

from tradebell.services.item_cache.item_cache import ItemCache

__all__ = ["ItemCache"]

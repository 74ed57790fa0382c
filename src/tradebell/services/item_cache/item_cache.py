# -*- coding: utf-8 -*-
"""Item description cache: resolves ItemRefs, fetching only what is not stored yet."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from tradebell.exceptions import SteamAPIError
from tradebell.models import Account, ItemDescription, ItemRef, ItemResolution

if TYPE_CHECKING:
    from tradebell.clients.steam_api import SteamApiClient
    from tradebell.persistence.repositories.interfaces import IItemDescriptionRepository


class ItemCache:
    """Cache for ItemRef -> ItemDescription. Resolves only missing refs.

    Entries never expire: a class/instance pair always describes the same item.
    Misses are batched into one GetAssetClassInfo call per app_id.
    Remote failures degrade to a partial resolution; a failed cache write keeps
    the fetched descriptions for this call.
    """

    def __init__(
        self,
        steam_client: SteamApiClient,
        repository: IItemDescriptionRepository,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the cache.

        Args:
            steam_client: Steam API gateway (injected).
            repository: Persistent description store (injected).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._client = steam_client
        self._repository = repository
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def get(self, item: ItemRef) -> ItemDescription | None:
        """Return the cached description of an item, or None."""
        return self._repository.get(item)

    async def resolve(self, items: Iterable[ItemRef], *, account: Account) -> ItemResolution:
        """Describe items from the cache, fetching misses in one batch per app.

        Args:
            items: Item refs to describe (duplicates allowed).
            account: Account whose API key is used for lookups on a miss.

        Returns:
            ItemResolution with descriptions for every resolved ref and `missing`
            holding refs that could not be described.
        """
        wanted = set(items)
        descriptions: dict[ItemRef, ItemDescription] = {}
        misses_by_app: dict[int, list[ItemRef]] = defaultdict(list)
        for item in wanted:
            cached = self._repository.get(item)
            if cached is not None:
                descriptions[item] = cached
            else:
                misses_by_app[item.app_id].append(item)

        if not misses_by_app:
            return ItemResolution(descriptions=descriptions)

        fetched: dict[ItemRef, ItemDescription] = {}
        with bound_contextvars(
            account_name=account.name,
            item_cache_requested_count=len(wanted),
            item_cache_missing_count=sum(len(v) for v in misses_by_app.values()),
        ):
            for app_id, misses in sorted(misses_by_app.items()):
                try:
                    result = await self._client.fetch_item_descriptions(
                        app_id, misses, api_key=account.api_key
                    )
                except SteamAPIError as e:
                    self._logger.warning(
                        "item_cache_fetch_failed",
                        steam_app_id=app_id,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    continue
                fetched.update({k: v for k, v in result.items() if k in wanted})

            if fetched:
                try:
                    await self._repository.put_many(fetched)
                except OSError as e:
                    self._logger.error(
                        "item_cache_persist_failed",
                        item_cache_fetched_count=len(fetched),
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
            descriptions.update(fetched)
            missing = frozenset(wanted - descriptions.keys())
            self._logger.debug(
                "item_cache_resolve",
                item_cache_fetched_count=len(fetched),
                item_cache_unresolved_count=len(missing),
            )
        return ItemResolution(descriptions=descriptions, missing=missing)

# -*- coding: utf-8 -*-
"""Unit tests for ItemCache (batched misses, idempotence, partial resolution)."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

from tradebell.exceptions import RateLimitError, TransientAPIError
from tradebell.models import UNKNOWN_ITEM_NAME, Account, ItemDescription, ItemRef
from tradebell.persistence.repositories.in_memory import InMemoryItemDescriptionRepository
from tradebell.services.item_cache import ItemCache


def _cache(steam: SimpleNamespace, repo: InMemoryItemDescriptionRepository) -> ItemCache:
    return ItemCache(cast(Any, steam), repo)


async def test_resolve_fetches_once_then_serves_from_cache(
    account: Account,
    item: ItemRef,
    description: ItemDescription,
    item_repo: InMemoryItemDescriptionRepository,
) -> None:
    steam = SimpleNamespace(fetch_item_descriptions=AsyncMock(return_value={item: description}))
    cache = _cache(steam, item_repo)

    first = await cache.resolve([item, item], account=account)
    second = await cache.resolve([item], account=account)

    assert first.descriptions == {item: description}
    assert not first.is_partial
    assert second.descriptions == {item: description}
    steam.fetch_item_descriptions.assert_awaited_once()
    args = steam.fetch_item_descriptions.await_args
    assert args.args[0] == 730
    assert args.args[1] == [item]
    assert args.kwargs == {"api_key": account.api_key}
    assert cache.get(item) == description


async def test_resolve_batches_misses_per_app(
    account: Account,
    item_repo: InMemoryItemDescriptionRepository,
) -> None:
    cs_a = ItemRef(app_id=730, class_id="1")
    cs_b = ItemRef(app_id=730, class_id="2")
    tf = ItemRef(app_id=440, class_id="3")

    async def _fetch(app_id: int, items: list[ItemRef], *, api_key: str) -> dict[ItemRef, ItemDescription]:
        return {i: ItemDescription(name=f"item-{i.class_id}") for i in items}

    steam = SimpleNamespace(fetch_item_descriptions=AsyncMock(side_effect=_fetch))
    cache = _cache(steam, item_repo)

    resolution = await cache.resolve([cs_a, tf, cs_b], account=account)

    assert steam.fetch_item_descriptions.await_count == 2
    calls = {c.args[0]: sorted(c.args[1]) for c in steam.fetch_item_descriptions.await_args_list}
    assert calls == {440: [tf], 730: [cs_a, cs_b]}
    assert resolution.name_for(cs_b) == "item-2"
    assert len(item_repo) == 3


async def test_resolve_skips_remote_call_when_everything_is_cached(
    account: Account,
    item: ItemRef,
    description: ItemDescription,
) -> None:
    repo = InMemoryItemDescriptionRepository({item: description})
    steam = SimpleNamespace(fetch_item_descriptions=AsyncMock())

    resolution = await _cache(steam, repo).resolve([item], account=account)

    assert resolution.descriptions == {item: description}
    steam.fetch_item_descriptions.assert_not_called()


async def test_remote_failure_gives_partial_resolution_and_leaves_cache_unchanged(
    account: Account,
    item: ItemRef,
    description: ItemDescription,
) -> None:
    other = ItemRef(app_id=440, class_id="99")
    repo = InMemoryItemDescriptionRepository({item: description})
    steam = SimpleNamespace(
        fetch_item_descriptions=AsyncMock(side_effect=RateLimitError(retry_after=30.0))
    )

    resolution = await _cache(steam, repo).resolve([item, other], account=account)

    assert resolution.is_partial
    assert resolution.missing == frozenset({other})
    assert resolution.name_for(other) == UNKNOWN_ITEM_NAME
    assert resolution.name_for(item) == description.display_name
    assert len(repo) == 1


async def test_one_failing_app_does_not_drop_the_others(
    account: Account,
    item_repo: InMemoryItemDescriptionRepository,
) -> None:
    good = ItemRef(app_id=440, class_id="1")
    bad = ItemRef(app_id=730, class_id="2")

    async def _fetch(app_id: int, items: list[ItemRef], *, api_key: str) -> dict[ItemRef, ItemDescription]:
        if app_id == 730:
            raise TransientAPIError("down", status_code=502)
        return {good: ItemDescription(name="Mann Co. Key")}

    steam = SimpleNamespace(fetch_item_descriptions=AsyncMock(side_effect=_fetch))

    resolution = await _cache(steam, item_repo).resolve([good, bad], account=account)

    assert resolution.missing == frozenset({bad})
    assert resolution.name_for(good) == "Mann Co. Key"
    assert item_repo.get(bad) is None


async def test_items_missing_from_response_stay_unresolved(
    account: Account,
    item: ItemRef,
    item_repo: InMemoryItemDescriptionRepository,
) -> None:
    steam = SimpleNamespace(fetch_item_descriptions=AsyncMock(return_value={}))

    resolution = await _cache(steam, item_repo).resolve([item], account=account)

    assert resolution.missing == frozenset({item})
    assert len(item_repo) == 0


async def test_failed_cache_write_still_returns_fetched_descriptions(
    account: Account,
    item: ItemRef,
    description: ItemDescription,
) -> None:
    repo = SimpleNamespace(
        get=lambda _: None,
        put_many=AsyncMock(side_effect=OSError(28, "No space left on device")),
    )
    steam = SimpleNamespace(fetch_item_descriptions=AsyncMock(return_value={item: description}))

    resolution = await ItemCache(cast(Any, steam), cast(Any, repo)).resolve([item], account=account)

    assert resolution.descriptions == {item: description}
    assert not resolution.is_partial
    repo.put_many.assert_awaited_once()

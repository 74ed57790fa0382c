# -*- coding: utf-8 -*-
"""Item description repository backed by one JSON cache file."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import structlog

from tradebell.models.item import ItemDescription, ItemRef
from tradebell.persistence.json_io import read_json, write_json_atomic
from tradebell.persistence.repositories.interfaces.item_description_repository import (
    IItemDescriptionRepository,
)


class JsonFileItemDescriptionRepository(IItemDescriptionRepository):
    """IItemDescriptionRepository persisted as {"<app>/<class>/<instance>": {...}}.

    Reads are served from memory without locking. Writes are serialized; each
    rewrites the whole file atomically. A corrupt file is moved aside to
    <path>.corrupt and the cache starts empty, since every entry can be fetched again.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = asyncio.Lock()
        self._store: dict[ItemRef, ItemDescription] = self._load()

    def _load(self) -> dict[ItemRef, ItemDescription]:
        try:
            raw = read_json(self._path)
        except (OSError, ValueError) as e:
            self._quarantine(e)
            return {}
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            self._quarantine(ValueError("cache file is not a JSON object"))
            return {}

        store: dict[ItemRef, ItemDescription] = {}
        skipped = 0
        for key, value in raw.items():
            try:
                store[ItemRef.from_cache_key(key)] = ItemDescription.from_dict(value)
            except (ValueError, TypeError, AttributeError):
                skipped += 1
        self._logger.info(
            "item_cache_loaded",
            cache_path=str(self._path),
            cache_entries_count=len(store),
            cache_skipped_count=skipped,
        )
        return store

    def _quarantine(self, error: Exception) -> None:
        target = self._path.with_name(self._path.name + ".corrupt")
        self._logger.warning(
            "item_cache_corrupt_starting_empty",
            cache_path=str(self._path),
            cache_quarantine_path=str(target),
            error_type=type(error).__name__,
            error_message=str(error),
        )
        try:
            os.replace(self._path, target)
        except OSError as e:
            self._logger.warning(
                "item_cache_quarantine_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )

    def get(self, item: ItemRef) -> ItemDescription | None:
        return self._store.get(item)

    async def put_many(self, descriptions: Mapping[ItemRef, ItemDescription]) -> None:
        """Add new entries and rewrite the file. No write when nothing is new."""
        async with self._lock:
            added = {k: v for k, v in descriptions.items() if k not in self._store}
            if not added:
                return
            self._store.update(added)
            snapshot = {item.cache_key: d.to_dict() for item, d in self._store.items()}
            await asyncio.to_thread(write_json_atomic, self._path, snapshot)

    def __len__(self) -> int:
        return len(self._store)

# -*- coding: utf-8 -*-
"""Seen trade repository backed by one JSON state file.

File layout: {"<account>": {"<trade_id>": "<seen_at ISO-8601>"}}. An account key
with an empty mapping means the account was seeded but had no completed trades.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import structlog

from tradebell.exceptions import StorageCorruptedError
from tradebell.models.seen_trade import SeenTrade
from tradebell.persistence.json_io import read_json, write_json_atomic
from tradebell.persistence.repositories.interfaces.seen_trade_repository import (
    ISeenTradeRepository,
)


def _parse_seen_at(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    # Legacy list layout or unreadable timestamp: treat as seen now.
    return datetime.now(UTC)


class JsonFileSeenTradeRepository(ISeenTradeRepository):
    """ISeenTradeRepository persisted to a JSON file after every mutation."""

    def __init__(
        self,
        path: str | Path,
        *,
        retention_days: int = 0,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Load the state file.

        Args:
            path: State file location. Missing or empty file means no account is seeded.
            retention_days: Drop entries older than this many days on load (0 disables).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).

        Raises:
            StorageCorruptedError: If the file exists but cannot be parsed.
        """
        self._path = Path(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = asyncio.Lock()
        self._store: dict[str, dict[str, SeenTrade]] = self._load(retention_days)

    def _load(self, retention_days: int) -> dict[str, dict[str, SeenTrade]]:
        try:
            raw = read_json(self._path)
        except (OSError, ValueError) as e:
            raise StorageCorruptedError(
                f"cannot read state file {self._path}: {e}", path=str(self._path)
            ) from e
        if raw is None:
            self._logger.info("state_file_missing_cold_start", state_path=str(self._path))
            return {}
        if not isinstance(raw, dict):
            raise StorageCorruptedError(
                f"state file {self._path} is not a JSON object", path=str(self._path)
            )

        cutoff = (
            datetime.now(UTC) - timedelta(days=retention_days) if retention_days > 0 else None
        )
        store: dict[str, dict[str, SeenTrade]] = {}
        pruned = 0
        for account, entries in raw.items():
            if isinstance(entries, list):
                entries = {str(trade_id): None for trade_id in entries}
            if not isinstance(entries, dict):
                raise StorageCorruptedError(
                    f"state file {self._path} has an invalid entry for {account!r}",
                    path=str(self._path),
                )
            trades: dict[str, SeenTrade] = {}
            for trade_id, seen_at in entries.items():
                seen = SeenTrade(
                    account=str(account),
                    trade_id=str(trade_id),
                    seen_at=_parse_seen_at(seen_at),
                )
                if cutoff is not None and seen.seen_at < cutoff:
                    pruned += 1
                    continue
                trades[seen.trade_id] = seen
            store[str(account)] = trades

        self._logger.info(
            "state_file_loaded",
            state_path=str(self._path),
            state_accounts_count=len(store),
            state_pruned_count=pruned,
        )
        return store

    def _snapshot(self) -> dict[str, dict[str, str]]:
        return {
            account: {tid: st.seen_at.isoformat() for tid, st in trades.items()}
            for account, trades in self._store.items()
        }

    async def _persist(self) -> None:
        snapshot = self._snapshot()
        await asyncio.to_thread(write_json_atomic, self._path, snapshot)

    async def contains(self, account: str, trade_id: str) -> bool:
        return trade_id.strip() in self._store.get(account.strip(), {})

    async def has_account(self, account: str) -> bool:
        return account.strip() in self._store

    async def trade_ids(self, account: str) -> frozenset[str]:
        return frozenset(self._store.get(account.strip(), {}))

    async def add(self, seen_trade: SeenTrade) -> None:
        """Record and persist a seen trade. No write when already present."""
        async with self._lock:
            trades = self._store.setdefault(seen_trade.account, {})
            if seen_trade.trade_id in trades:
                return
            trades[seen_trade.trade_id] = seen_trade
            await self._persist()

    async def add_batch(self, seen_trades: list[SeenTrade]) -> None:
        async with self._lock:
            changed = False
            for st in seen_trades:
                trades = self._store.setdefault(st.account, {})
                if st.trade_id not in trades:
                    trades[st.trade_id] = st
                    changed = True
            if changed:
                await self._persist()

    async def seed(self, account: str, seen_trades: list[SeenTrade]) -> None:
        async with self._lock:
            trades = self._store.setdefault(account.strip(), {})
            for st in seen_trades:
                trades.setdefault(st.trade_id, st)
            await self._persist()

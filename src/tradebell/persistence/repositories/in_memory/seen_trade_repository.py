# -*- coding: utf-8 -*-
"""In-memory seen trade repository (keyed by account, then trade_id)."""

from __future__ import annotations

from tradebell.models.seen_trade import SeenTrade
from tradebell.persistence.repositories.interfaces.seen_trade_repository import (
    ISeenTradeRepository,
)


class InMemorySeenTradeRepository(ISeenTradeRepository):
    """In-memory implementation of ISeenTradeRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[str, dict[str, SeenTrade]] = {}

    async def contains(self, account: str, trade_id: str) -> bool:
        """Return True if (account, trade_id) has been seen."""
        return trade_id.strip() in self._store.get(account.strip(), {})

    async def has_account(self, account: str) -> bool:
        return account.strip() in self._store

    async def trade_ids(self, account: str) -> frozenset[str]:
        return frozenset(self._store.get(account.strip(), {}))

    async def add(self, seen_trade: SeenTrade) -> None:
        """Record that a trade has been seen. Idempotent."""
        trades = self._store.setdefault(seen_trade.account, {})
        trades.setdefault(seen_trade.trade_id, seen_trade)

    async def seed(self, account: str, seen_trades: list[SeenTrade]) -> None:
        trades = self._store.setdefault(account.strip(), {})
        for st in seen_trades:
            trades.setdefault(st.trade_id, st)

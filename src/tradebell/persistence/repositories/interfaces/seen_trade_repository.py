"""Abstract interface for seen trade storage (in-memory, JSON file, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tradebell.models.seen_trade import SeenTrade


class ISeenTradeRepository(ABC):
    """Interface for persisting SeenTrade (trades that need no further notification)."""

    @abstractmethod
    async def contains(self, account: str, trade_id: str) -> bool:
        """Return True if (account, trade_id) has been seen."""
        ...

    @abstractmethod
    async def has_account(self, account: str) -> bool:
        """Return True if the account completed its cold-start seeding."""
        ...

    @abstractmethod
    async def trade_ids(self, account: str) -> frozenset[str]:
        """Return all seen trade ids of an account."""
        ...

    @abstractmethod
    async def add(self, seen_trade: SeenTrade) -> None:
        """Record that a trade has been seen. Idempotent (re-adding same key is no-op)."""
        ...

    @abstractmethod
    async def seed(self, account: str, seen_trades: list[SeenTrade]) -> None:
        """Register the account (even with no trades) and record the trades in one write."""
        ...

    async def add_batch(self, seen_trades: list[SeenTrade]) -> None:
        """Record multiple trades. Default impl calls add() for each."""
        for st in seen_trades:
            await self.add(st)

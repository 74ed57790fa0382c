"""SeenTrade: record of a trade that was reported (or seeded on cold start).

Identity is (account, trade_id). Used to avoid re-notifying trades across restarts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class SeenTrade:
    """Record that a completed trade needs no further notification.

    Identity: (account, trade_id). seen_at supports retention policies.
    """

    account: str
    """Watched account name."""
    trade_id: str
    """Steam tradeofferid."""
    seen_at: datetime
    """When the trade was marked (for retention/audit)."""

    @classmethod
    def create(
        cls,
        account: str,
        trade_id: str,
        *,
        seen_at: datetime | None = None,
    ) -> SeenTrade:
        """Create a new SeenTrade record."""
        account = account.strip()
        trade_id = trade_id.strip()
        if not account or not trade_id:
            raise ValueError("account and trade_id must be non-empty")
        return cls(
            account=account,
            trade_id=trade_id,
            seen_at=seen_at or datetime.now(UTC),
        )

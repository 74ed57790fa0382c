"""Poll cycle states and outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PollState(str, Enum):
    """Where an account's poller is in its cycle."""

    IDLE = "IDLE"
    FETCHING = "FETCHING"
    DIFFING = "DIFFING"
    ENRICHING = "ENRICHING"
    NOTIFYING = "NOTIFYING"
    DISABLED = "DISABLED"
    """Fatal API error; the account is not polled again in this run."""


class CycleStatus(str, Enum):
    """How one poll cycle ended."""

    OK = "OK"
    SEEDED = "SEEDED"
    RATE_LIMITED = "RATE_LIMITED"
    TRANSIENT_ERROR = "TRANSIENT_ERROR"
    DISABLED = "DISABLED"
    INTERRUPTED = "INTERRUPTED"
    """Shutdown requested before every new trade was notified."""
    ERROR = "ERROR"


@dataclass(frozen=True, slots=True)
class CycleOutcome:
    """Summary of one poll cycle of one account."""

    status: CycleStatus
    next_delay: float | None
    """Seconds until the next attempt; None when the account must not be polled again."""
    offers_count: int = 0
    seeded: tuple[str, ...] = ()
    notified: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    unresolved_items: int = 0
    errors: dict[str, str] = field(default_factory=dict)

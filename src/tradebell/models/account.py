"""Account: one watched Steam account."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tradebell.config import AccountSettings


@dataclass(frozen=True, slots=True)
class Account:
    """Steam account whose trade offers are polled.

    Identity: name (unique within the configuration). Immutable for the process lifetime.
    """

    name: str
    """Display name used in logs, notifications and as the state file key."""
    api_key: str = field(repr=False)
    """Steam Web API key. Never logged."""

    @classmethod
    def from_settings(cls, settings: AccountSettings) -> Account:
        """Build from the validated configuration entry."""
        return cls(name=settings.name, api_key=settings.api_key.get_secret_value())

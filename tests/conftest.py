# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from tradebell.config import Settings
from tradebell.models import Account, ItemDescription, ItemRef, TradeOffer, TradeOfferState
from tradebell.persistence.repositories.in_memory import (
    InMemoryItemDescriptionRepository,
    InMemorySeenTradeRepository,
)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Keep a developer's config.json and env out of Settings built in tests."""
    monkeypatch.setenv("TRADEBELL_CONFIG", str(tmp_path / "missing-config.json"))
    for name in ("ACCOUNTS", "TELEGRAM__ENABLED", "TELEGRAM__TOKEN", "TELEGRAM__CHAT_ID"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def account() -> Account:
    """Default watched account used by tests."""
    return Account(name="Main", api_key="ABCDEF0123456789ABCDEF0123456789")


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def item() -> ItemRef:
    return ItemRef(app_id=730, class_id="310776767", instance_id="302028390")


@pytest.fixture
def description() -> ItemDescription:
    return ItemDescription(
        name="AK-47 | Redline",
        market_name="AK-47 | Redline (Field-Tested)",
        market_hash_name="AK-47 | Redline (Field-Tested)",
        icon_url="fWFc82js0fmoRAP-qOIPu5THSWqfSmTELLqcUywGkijVjZULUrsm1j-9xgEObwgfEh_nvjlWhNzZCveCDfIBj98xqodQ2CZknz5oM7bgZ2I0dQ",
        name_color="D2D2D2",
        type="Classified Rifle",
    )


@pytest.fixture
def offer_factory(account: Account, now_utc: datetime) -> Callable[..., TradeOffer]:
    """Build a TradeOffer with sensible defaults and easy overrides."""

    def _build(trade_id: str, **overrides: Any) -> TradeOffer:
        return TradeOffer(
            trade_id=trade_id,
            account=overrides.pop("account", account.name),
            state=overrides.pop("state", TradeOfferState.ACCEPTED),
            items_given=tuple(overrides.pop("items_given", ())),
            items_received=tuple(overrides.pop("items_received", ())),
            time_created=overrides.pop("time_created", now_utc),
            time_updated=overrides.pop("time_updated", now_utc),
            partner_account_id=overrides.pop("partner_account_id", 12345678),
            message=overrides.pop("message", None),
            is_our_offer=overrides.pop("is_our_offer", False),
        )

    return _build


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    """Build Settings from keyword overrides only."""

    def _build(**overrides: Any) -> Settings:
        return Settings(**overrides)

    return _build


@pytest.fixture
def seen_repo() -> InMemorySeenTradeRepository:
    """Fresh in-memory seen trade repository per test."""
    return InMemorySeenTradeRepository()


@pytest.fixture
def item_repo() -> InMemoryItemDescriptionRepository:
    """Fresh in-memory item description repository per test."""
    return InMemoryItemDescriptionRepository()

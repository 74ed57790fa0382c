# -*- coding: utf-8 -*-
"""Unit tests for the trade_completed message builder and notifier."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import pytest

from tradebell.exceptions import TransientSendError
from tradebell.models import ItemDescription, ItemRef, ItemResolution, TradeOffer
from tradebell.services.notifications import (
    TradeCompletedNotifier,
    build_trade_message,
    unresolved_count,
)


def test_unresolved_count_only_counts_this_trades_items(
    offer_factory: Callable[..., TradeOffer],
    item: ItemRef,
    description: ItemDescription,
) -> None:
    mine = ItemRef(app_id=440, class_id="5021")
    other_trade_item = ItemRef(app_id=570, class_id="77")
    resolution = ItemResolution(
        descriptions={item: description},
        missing=frozenset({mine, other_trade_item}),
    )
    offer = offer_factory("T7", items_received=[item, mine], items_given=[mine])

    message = build_trade_message(offer, resolution)

    assert unresolved_count(offer, resolution) == 2
    assert message.payload is not None
    assert message.payload["unresolved_count"] == 2
    assert message.payload["items_received"] == [description.display_name, "Unknown Item"]
    assert message.payload["items_given"] == ["Unknown Item"]
    assert message.account == "Main"


def test_fully_described_trade_has_no_unresolved_items(
    offer_factory: Callable[..., TradeOffer],
    item: ItemRef,
    description: ItemDescription,
) -> None:
    resolution = ItemResolution(
        descriptions={item: description},
        missing=frozenset({ItemRef(app_id=440, class_id="1")}),
    )

    message = build_trade_message(offer_factory("T8", items_received=[item]), resolution)

    assert message.payload is not None
    assert message.payload["unresolved_count"] == 0


async def test_notify_propagates_delivery_failure(
    offer_factory: Callable[..., TradeOffer],
) -> None:
    dispatcher = SimpleNamespace(send=AsyncMock(side_effect=TransientSendError("down")))
    notifier = TradeCompletedNotifier(cast(Any, dispatcher))

    with pytest.raises(TransientSendError):
        await notifier.notify(offer_factory("T9"), ItemResolution())

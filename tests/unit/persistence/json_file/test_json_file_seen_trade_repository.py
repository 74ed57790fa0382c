# -*- coding: utf-8 -*-
"""Unit tests for JsonFileSeenTradeRepository."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from tradebell.exceptions import StorageCorruptedError
from tradebell.models import SeenTrade
from tradebell.persistence.repositories.json_file import JsonFileSeenTradeRepository


async def test_missing_file_means_cold_start(tmp_path: Path) -> None:
    repo = JsonFileSeenTradeRepository(tmp_path / "state.json")

    assert not await repo.has_account("Main")
    assert not (tmp_path / "state.json").exists()


async def test_state_survives_restart(tmp_path: Path) -> None:
    path = tmp_path / "state" / "state.json"
    repo = JsonFileSeenTradeRepository(path)
    await repo.seed("Main", [SeenTrade.create("Main", "T1")])
    await repo.seed("Empty", [])
    await repo.add(SeenTrade.create("Main", "T3"))

    reloaded = JsonFileSeenTradeRepository(path)

    assert await reloaded.trade_ids("Main") == frozenset({"T1", "T3"})
    assert await reloaded.has_account("Empty")
    assert await reloaded.trade_ids("Empty") == frozenset()
    assert set(json.loads(path.read_text())["Main"]) == {"T1", "T3"}


async def test_add_existing_trade_does_not_rewrite_file(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    repo = JsonFileSeenTradeRepository(path)
    await repo.seed("Main", [SeenTrade.create("Main", "T1")])
    path.write_text("{}", encoding="utf-8")

    await repo.add(SeenTrade.create("Main", "T1"))

    assert path.read_text(encoding="utf-8") == "{}"


async def test_legacy_list_layout_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"Main": ["T1", "T2"]}), encoding="utf-8")

    repo = JsonFileSeenTradeRepository(path)

    assert await repo.trade_ids("Main") == frozenset({"T1", "T2"})


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"Main": 5}'])
def test_unreadable_state_file_is_fatal(tmp_path: Path, content: str) -> None:
    path = tmp_path / "state.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(StorageCorruptedError) as exc_info:
        JsonFileSeenTradeRepository(path)

    assert exc_info.value.path == str(path)


def test_empty_state_file_is_cold_start(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("", encoding="utf-8")

    JsonFileSeenTradeRepository(path)


async def test_retention_prunes_old_entries_on_load(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    now = datetime.now(UTC)
    path.write_text(
        json.dumps(
            {
                "Main": {
                    "old": (now - timedelta(days=40)).isoformat(),
                    "recent": (now - timedelta(days=2)).isoformat(),
                }
            }
        ),
        encoding="utf-8",
    )

    repo = JsonFileSeenTradeRepository(path, retention_days=30)

    assert await repo.trade_ids("Main") == frozenset({"recent"})
    assert await repo.has_account("Main")

# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient failure classification."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock

import aiohttp
import pytest

from tradebell.clients import AsyncHttpClient
from tradebell.config import Settings
from tradebell.exceptions import FatalAPIError, RateLimitError, TransientAPIError


class _FakeResponseContext:
    def __init__(self, response: Any = None, error: BaseException | None = None) -> None:
        self._response = response
        self._error = error

    async def __aenter__(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._response

    async def __aexit__(self, *args: Any) -> None:
        return None


def _session(
    status: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
    error: BaseException | None = None,
) -> SimpleNamespace:
    response = SimpleNamespace(
        status=status,
        headers=headers or {},
        json=AsyncMock(return_value=body),
    )
    session = SimpleNamespace(closed=False, calls=[])

    def _get(url: str, params: Any = None) -> _FakeResponseContext:
        session.calls.append((url, params))
        return _FakeResponseContext(response, error)

    session.get = _get
    return session


def _client(settings_factory: Callable[..., Settings], session: SimpleNamespace) -> AsyncHttpClient:
    return AsyncHttpClient(settings_factory(), session=cast(Any, session))


async def test_get_returns_parsed_json(settings_factory: Callable[..., Settings]) -> None:
    session = _session(body={"response": {}})

    data = await _client(settings_factory, session).get("https://x/y", params={"key": "secret"})

    assert data == {"response": {}}
    assert session.calls == [("https://x/y", {"key": "secret"})]


async def test_429_raises_rate_limit_with_retry_after(
    settings_factory: Callable[..., Settings],
) -> None:
    session = _session(status=429, headers={"Retry-After": "90"})

    with pytest.raises(RateLimitError) as exc_info:
        await _client(settings_factory, session).get("https://x/y")

    assert exc_info.value.retry_after == 90.0
    assert exc_info.value.status_code == 429


async def test_429_without_retry_after(settings_factory: Callable[..., Settings]) -> None:
    session = _session(status=429, headers={"Retry-After": "soon"})

    with pytest.raises(RateLimitError) as exc_info:
        await _client(settings_factory, session).get("https://x/y")

    assert exc_info.value.retry_after is None


@pytest.mark.parametrize("status", [401, 403, 400])
async def test_client_errors_are_fatal(
    settings_factory: Callable[..., Settings],
    status: int,
) -> None:
    with pytest.raises(FatalAPIError) as exc_info:
        await _client(settings_factory, _session(status=status)).get("https://x/y")

    assert exc_info.value.status_code == status


@pytest.mark.parametrize("status", [408, 425, 500, 502, 503])
async def test_server_and_timeout_statuses_are_transient(
    settings_factory: Callable[..., Settings],
    status: int,
) -> None:
    with pytest.raises(TransientAPIError) as exc_info:
        await _client(settings_factory, _session(status=status)).get("https://x/y")

    assert exc_info.value.status_code == status


@pytest.mark.parametrize(
    "error",
    [asyncio.TimeoutError(), aiohttp.ClientConnectionError("reset")],
)
async def test_network_errors_are_transient(
    settings_factory: Callable[..., Settings],
    error: BaseException,
) -> None:
    with pytest.raises(TransientAPIError) as exc_info:
        await _client(settings_factory, _session(error=error)).get("https://x/y")

    assert exc_info.value.cause is error


async def test_invalid_json_is_transient(settings_factory: Callable[..., Settings]) -> None:
    session = _session()
    session_response_json = AsyncMock(side_effect=ValueError("Expecting value"))

    def _get(url: str, params: Any = None) -> _FakeResponseContext:
        return _FakeResponseContext(SimpleNamespace(status=200, headers={}, json=session_response_json))

    session.get = _get

    with pytest.raises(TransientAPIError):
        await _client(settings_factory, session).get("https://x/y")


async def test_aclose_leaves_injected_session_open(
    settings_factory: Callable[..., Settings],
) -> None:
    session = _session()
    session.close = AsyncMock()

    async with _client(settings_factory, session):
        pass

    session.close.assert_not_called()

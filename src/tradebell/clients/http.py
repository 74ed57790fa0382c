# -*- coding: utf-8 -*-
"""Async HTTP client that classifies failures for the poll scheduler."""

from __future__ import annotations

import asyncio
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from tradebell.config import Settings
from tradebell.exceptions import FatalAPIError, RateLimitError, TransientAPIError


# Request Timeout and Too Early: the same request may succeed later.
_TRANSIENT_CLIENT_STATUSES = frozenset({408, 425})


def _parse_retry_after(header: Optional[str]) -> Optional[float]:
    if not header:
        return None
    try:
        value = float(header)
    except ValueError:
        return None
    return value if value > 0 else None


class AsyncHttpClient:
    """Async HTTP client for the Steam Web API.

    Performs exactly one attempt per call; retry policy belongs to the caller.
    Failures are raised as RateLimitError, TransientAPIError or FatalAPIError.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (uses settings.api.timeout_seconds).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform a GET request and return parsed JSON.

        Args:
            url: Full URL to request.
            params: Optional query parameters (may contain secrets; never logged).

        Returns:
            Parsed JSON response (dict or list).

        Raises:
            RateLimitError: On HTTP 429; retry_after taken from the Retry-After header.
            FatalAPIError: On HTTP 401/403 and other 4xx responses (except 408/425).
            TransientAPIError: On 5xx, 408/425, timeouts, connection errors and invalid JSON.
        """
        params = params or {}
        request_id = uuid.uuid4().hex[:12]

        with bound_contextvars(http_url=url, http_request_id=request_id):
            try:
                session = await self._get_session()
                async with session.get(url, params=params) as response:
                    status = response.status
                    if status == 429:
                        retry_after = _parse_retry_after(response.headers.get("Retry-After"))
                        self._logger.warning(
                            "http_get_rate_limited",
                            http_status_code=status,
                            http_retry_after_seconds=retry_after,
                        )
                        raise RateLimitError(url=url, retry_after=retry_after)
                    if status >= 500 or status in _TRANSIENT_CLIENT_STATUSES:
                        self._logger.warning("http_get_transient_status", http_status_code=status)
                        raise TransientAPIError(
                            f"GET {url} returned {status}", url=url, status_code=status
                        )
                    if status >= 400:
                        self._logger.error("http_get_rejected", http_status_code=status)
                        raise FatalAPIError(
                            f"GET {url} returned {status}", url=url, status_code=status
                        )
                    return await response.json(content_type=None)
            except (aiohttp.ContentTypeError, ValueError) as e:
                self._logger.warning(
                    "http_get_invalid_body",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise TransientAPIError(f"GET {url} returned an invalid body", url=url, cause=e) from e
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                self._logger.warning(
                    "http_get_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise TransientAPIError(f"GET {url} failed", url=url, cause=e) from e

# -*- coding: utf-8 -*-
"""Steam Web API client: trade offers and item class descriptions."""

from __future__ import annotations

import time
import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence, cast
from structlog.contextvars import bound_contextvars

from tradebell.config import Settings
from tradebell.exceptions import TransientAPIError
from tradebell.models import Account, ItemDescription, ItemRef, TradeOffer

if TYPE_CHECKING:
    from .http import AsyncHttpClient

GET_TRADE_OFFERS_PATH = "/IEconService/GetTradeOffers/v1/"
GET_ASSET_CLASS_INFO_PATH = "/ISteamEconomy/GetAssetClassInfo/v0001/"


class SteamApiClient:
    """Remote API gateway for IEconService and ISteamEconomy.

    No caching and no retry: every call is one request, and failures surface as
    RateLimitError, TransientAPIError or FatalAPIError from the HTTP client.
    """

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        clock: Callable[[], float] = time.time,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api).
            clock: Wall clock in epoch seconds (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _url(self, path: str) -> str:
        return f"{self._settings.api.steam_api_host.rstrip('/')}{path}"

    async def fetch_trade_offers(self, account: Account) -> List[TradeOffer]:
        """Fetch sent and received offers updated within the history window.

        Args:
            account: Account whose API key is used.

        Returns:
            Offers from both directions. Entries without a tradeofferid are skipped.
        """
        cutoff = int(self._clock()) - self._settings.api.history_window_seconds
        params: Dict[str, Any] = {
            "key": account.api_key,
            "get_received_offers": 1,
            "get_sent_offers": 1,
            "active_only": 0,
            "historical_only": 0,
            "get_descriptions": 0,
            "time_historical_cutoff": max(0, cutoff),
            "format": "json",
        }
        with bound_contextvars(account_name=account.name):
            data = await self._http.get(self._url(GET_TRADE_OFFERS_PATH), params=params)
            if not isinstance(data, dict):
                raise TransientAPIError(
                    f"GetTradeOffers returned {type(data).__name__}",
                    url=self._url(GET_TRADE_OFFERS_PATH),
                )
            body = cast(Dict[str, Any], data).get("response") or {}
            offers: List[TradeOffer] = []
            for direction in ("trade_offers_received", "trade_offers_sent"):
                raw = body.get(direction) or []
                for entry in cast(List[Any], raw):
                    if not isinstance(entry, dict):
                        continue
                    try:
                        offers.append(TradeOffer.from_response(account.name, entry))
                    except ValueError as e:
                        self._logger.warning(
                            "steam_trade_offer_skipped",
                            steam_direction=direction,
                            error_message=str(e),
                        )
            self._logger.debug("steam_trade_offers_fetched", steam_offers_count=len(offers))
            return offers

    async def fetch_item_descriptions(
        self,
        app_id: int,
        items: Sequence[ItemRef],
        *,
        api_key: str,
    ) -> Dict[ItemRef, ItemDescription]:
        """Look up descriptions for item classes of one app.

        Args:
            app_id: Steam app the items belong to.
            items: Item refs (only those with this app_id are requested).
            api_key: Steam Web API key used for the lookup.

        Returns:
            Descriptions for the items Steam described. Items without a parseable
            entry are absent from the mapping.

        Raises:
            TransientAPIError: If Steam reports the lookup as unsuccessful.
        """
        wanted = sorted({item for item in items if item.app_id == app_id})
        if not wanted:
            return {}

        params: Dict[str, Any] = {
            "key": api_key,
            "format": "json",
            "appid": app_id,
            "class_count": len(wanted),
        }
        for i, item in enumerate(wanted):
            params[f"classid{i}"] = item.class_id
            params[f"instanceid{i}"] = item.instance_id

        url = self._url(GET_ASSET_CLASS_INFO_PATH)
        with bound_contextvars(steam_app_id=app_id, steam_class_count=len(wanted)):
            data = await self._http.get(url, params=params)
            result = cast(Dict[str, Any], data).get("result") if isinstance(data, dict) else None
            if not isinstance(result, dict):
                raise TransientAPIError("GetAssetClassInfo returned no result", url=url)
            if result.get("success") is False:
                raise TransientAPIError(
                    f"GetAssetClassInfo failed: {result.get('error', 'unknown error')}",
                    url=url,
                )

            descriptions: Dict[ItemRef, ItemDescription] = {}
            for item in wanted:
                raw = result.get(f"{item.class_id}_{item.instance_id}")
                if raw is None:
                    raw = result.get(item.class_id)
                if not isinstance(raw, dict):
                    continue
                try:
                    descriptions[item] = ItemDescription.from_dict(cast(Dict[str, Any], raw))
                except ValueError:
                    self._logger.debug("steam_item_description_unparseable", steam_item=item.cache_key)
            self._logger.debug(
                "steam_item_descriptions_fetched",
                steam_described_count=len(descriptions),
            )
            return descriptions

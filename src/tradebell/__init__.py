"""tradebell: Steam trade watcher with Telegram notifications."""

from tradebell.clients import AsyncHttpClient, SteamApiClient
from tradebell.config import get_settings
from tradebell.DI import Container
from tradebell.services import ItemCache, PollingRunner, TradeStateTracker

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "Container",
    "ItemCache",
    "PollingRunner",
    "SteamApiClient",
    "TradeStateTracker",
    "get_settings",
]

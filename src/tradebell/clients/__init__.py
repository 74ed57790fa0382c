"""HTTP and API clients."""

from tradebell.clients.http import AsyncHttpClient
from tradebell.clients.steam_api import SteamApiClient

__all__ = [
    "AsyncHttpClient",
    "SteamApiClient",
]

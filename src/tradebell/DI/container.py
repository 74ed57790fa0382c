# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from tradebell.clients.http import AsyncHttpClient
from tradebell.clients.steam_api import SteamApiClient
from tradebell.config import Settings, get_settings
from tradebell.models import Account
from tradebell.notifications.dispatcher import NotificationDispatcher
from tradebell.notifications.strategies.base import BaseNotificationStrategy
from tradebell.notifications.strategies.console import ConsoleNotifier
from tradebell.notifications.strategies.telegram import TelegramNotifier
from tradebell.notifications.stylers.notification_styler import EventNotificationStyler
from tradebell.persistence.repositories.json_file import (
    JsonFileItemDescriptionRepository,
    JsonFileSeenTradeRepository,
)
from tradebell.services.item_cache import ItemCache
from tradebell.services.notifications import TradeCompletedNotifier
from tradebell.services.polling import AccountPoller, PollingRunner
from tradebell.services.trade_state import TradeStateTracker


def _build_notification_notifiers(
    settings: Settings,
    styler: EventNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


def _build_accounts(settings: Settings) -> list[Account]:
    return [Account.from_settings(a) for a in settings.accounts]


def _build_seen_trade_repository(settings: Settings) -> JsonFileSeenTradeRepository:
    tr = settings.tracking
    return JsonFileSeenTradeRepository(tr.state_path, retention_days=tr.seen_retention_days)


def _build_item_description_repository(settings: Settings) -> JsonFileItemDescriptionRepository:
    return JsonFileItemDescriptionRepository(settings.tracking.cache_path)


def _polling_interval(settings: Settings) -> int:
    return settings.tracking.polling_interval_seconds


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP client, Steam client, storage, pollers."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    steam_client = providers.Singleton(
        SteamApiClient,
        http_client=http_client,
        settings=config,
    )

    seen_trade_repository = providers.Singleton(_build_seen_trade_repository, config)

    item_description_repository = providers.Singleton(_build_item_description_repository, config)

    item_cache = providers.Singleton(
        ItemCache,
        steam_client=steam_client,
        repository=item_description_repository,
    )

    trade_state_tracker = providers.Singleton(
        TradeStateTracker,
        seen_trade_repository=seen_trade_repository,
    )

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_dispatcher = providers.Singleton(
        NotificationDispatcher,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    trade_completed_notifier = providers.Singleton(
        TradeCompletedNotifier,
        dispatcher=notification_dispatcher,
    )

    accounts = providers.Singleton(_build_accounts, config)

    account_poller = providers.Factory(
        AccountPoller,
        steam_client=steam_client,
        tracker=trade_state_tracker,
        item_cache=item_cache,
        trade_notifier=trade_completed_notifier,
        dispatcher=notification_dispatcher,
        polling_interval_seconds=providers.Callable(_polling_interval, config),
    )

    polling_runner = providers.Singleton(
        PollingRunner,
        accounts=accounts,
        poller_factory=account_poller.provider,
    )

# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from evm_copy_trading.clients.chain_client import ChainClient
from evm_copy_trading.clients.http import AsyncHttpClient
from evm_copy_trading.clients.zerox_client import ZeroExClient
from evm_copy_trading.config import Settings, get_settings
from evm_copy_trading.events.bus import get_event_bus
from evm_copy_trading.notifications.notification_manager import NotificationService
from evm_copy_trading.notifications.strategies.base import BaseNotificationStrategy
from evm_copy_trading.notifications.strategies.console import ConsoleNotifier
from evm_copy_trading.notifications.strategies.telegram import TelegramNotifier
from evm_copy_trading.notifications.stylers.notification_styler import EventNotificationStyler
from evm_copy_trading.persistence.repositories.in_memory import (
    InMemorySeenTransactionRepository,
)
from evm_copy_trading.services.classification import SwapClassifier
from evm_copy_trading.services.dispatch import EventDispatcher
from evm_copy_trading.services.notifications import TradeNotifier
from evm_copy_trading.services.reconciliation import TransferReconciler
from evm_copy_trading.services.trade_execution import TradeExecutor
from evm_copy_trading.web.server import WebhookServer


def _build_seen_transaction_repository(settings: Settings) -> InMemorySeenTransactionRepository:
    """Dedup window and capacity from settings.tracking."""
    return InMemorySeenTransactionRepository(
        ttl_seconds=settings.tracking.dedup_ttl_seconds,
        maxsize=settings.tracking.dedup_max_entries,
    )


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


def _wallet_address(chain_client: ChainClient) -> str:
    return chain_client.wallet_address


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, clients, pipeline services and the webhook server."""

    config = providers.Callable(get_settings)

    event_bus = providers.Callable(get_event_bus)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    zerox_client = providers.Singleton(
        ZeroExClient,
        http_client=http_client,
        settings=config,
    )

    chain_client = providers.Singleton(
        ChainClient,
        settings=config,
    )

    seen_transaction_repository = providers.Singleton(_build_seen_transaction_repository, config)

    transfer_reconciler = providers.Singleton(
        TransferReconciler,
        chain_client=chain_client,
        settings=config,
    )

    swap_classifier = providers.Singleton(
        SwapClassifier,
        settings=config,
    )

    trade_executor = providers.Singleton(
        TradeExecutor,
        settings=config,
        zerox_client=zerox_client,
        chain_client=chain_client,
        event_bus=event_bus,
    )

    event_dispatcher = providers.Singleton(
        EventDispatcher,
        settings=config,
        seen_transaction_repository=seen_transaction_repository,
        reconciler=transfer_reconciler,
        classifier=swap_classifier,
        executor=trade_executor,
        event_bus=event_bus,
    )

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    trade_notifier = providers.Singleton(
        TradeNotifier,
        notification_service=notification_service,
        event_bus=event_bus,
        settings=config,
    )

    webhook_server = providers.Singleton(
        WebhookServer,
        dispatcher=event_dispatcher,
        settings=config,
        wallet_address=providers.Callable(_wallet_address, chain_client),
    )

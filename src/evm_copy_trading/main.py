# -*- coding: utf-8 -*-
"""
Entry point for the copy-trading service.

Orchestrates: logging, settings, container, notifications, webhook server,
shutdown (SIGINT/SIGTERM or CancelledError).
Notifications flow: webhook -> EventDispatcher (task per notification)
-> TransferReconciler -> SwapClassifier -> TradeExecutor.

Run with: python -m evm_copy_trading.main
"""
from __future__ import annotations

import asyncio
import signal
from typing import Any

import structlog

from evm_copy_trading.DI import Container
from evm_copy_trading.config import get_settings
from evm_copy_trading.exceptions import MissingRequiredConfigError
from evm_copy_trading.logging.config import configure_logging
from evm_copy_trading.notifications.types import NotificationMessage
from evm_copy_trading.utils import mask_address

# Grace period for in-flight notifications on shutdown.
_DRAIN_TIMEOUT_SECONDS = 10.0


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


async def _shutdown(container: Container, logger: Any) -> None:
    """Stop accepting webhooks, drain in-flight work and close resources."""
    await container.webhook_server().stop()
    await container.event_dispatcher().aclose(timeout=_DRAIN_TIMEOUT_SECONDS)
    await container.trade_executor().aclose()
    container.trade_notifier().stop()

    notification_service = container.notification_service()
    notification_service.notify(
        NotificationMessage(
            event_type="system_stopped",
            message="Copy trading service stopped",
        )
    )
    await notification_service.shutdown()
    await container.http_client().aclose()
    logger.info("main_shutdown_complete")


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    missing = settings.missing_required()
    if missing:
        logger.error("main_missing_required_config", missing=missing)
        raise MissingRequiredConfigError(", ".join(missing))

    container = Container()
    chain_client = container.chain_client()
    notification_service = container.notification_service()
    await notification_service.initialize()
    container.trade_notifier().start()

    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)

    server = container.webhook_server()
    await server.start()

    target_wallet = settings.tracking.target_wallet.strip()
    logger.info(
        "main_service_started",
        target_wallet=mask_address(target_wallet),
        wallet=mask_address(chain_client.wallet_address),
        network=settings.chain.network,
        buy_amount_eth=settings.trading.buy_amount_eth,
        slippage_bps=settings.trading.slippage_bps,
        blacklisted_tokens=len(settings.trading.blacklist_tokens),
    )
    notification_service.notify(
        NotificationMessage(
            event_type="system_started",
            message="Copy trading service started",
            payload={
                "target_wallet": mask_address(target_wallet),
                "wallet": mask_address(chain_client.wallet_address),
                "network": settings.chain.network,
            },
        )
    )

    try:
        await shutdown_event.wait()
        logger.info("main_shutdown_requested")
    finally:
        await _shutdown(container, logger)


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()

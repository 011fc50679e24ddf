# -*- coding: utf-8 -*-
"""TradeNotifier: listens to copy-trade events and sends notifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from web3 import Web3

from evm_copy_trading.events.trades import (
    SwapDetectedEvent,
    TradeBroadcastEvent,
    TradeConfirmedEvent,
    TradeFailedEvent,
)
from evm_copy_trading.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from evm_copy_trading.config import Settings
    from evm_copy_trading.notifications.notification_manager import NotificationService


_STAGE_LABELS = {
    "quote": "No quote from aggregator",
    "broadcast": "Funding transaction not sent",
    "confirmation": "Funding transaction not confirmed",
}


class TradeNotifier:
    """Subscribes to trade lifecycle events and forwards them to NotificationService."""

    def __init__(
        self,
        notification_service: "NotificationService",
        event_bus: Any,
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._notification_service = notification_service
        self._event_bus: "EventBus" = event_bus
        self._explorer_tx_url = settings.chain.explorer_tx_url
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _subscriptions(self) -> list[tuple[type, Callable[[Any], None]]]:
        return [
            (SwapDetectedEvent, self._on_swap_detected),
            (TradeBroadcastEvent, self._on_broadcast),
            (TradeConfirmedEvent, self._on_confirmed),
            (TradeFailedEvent, self._on_failed),
        ]

    def start(self) -> None:
        """Subscribe to the trade lifecycle events."""
        for event_type, handler in self._subscriptions():
            self._event_bus.on(event_type, handler)
        self._logger.debug("trade_notifier_started")

    def stop(self) -> None:
        """Unsubscribe from the trade lifecycle events."""
        handlers = getattr(self._event_bus, "handlers", {})
        for event_type, handler in self._subscriptions():
            key = event_type.__name__
            if key in handlers:
                handlers[key] = [h for h in handlers[key] if h != handler]
        self._logger.debug("trade_notifier_stopped")

    def _tx_link(self, label: str, tx_hash: Optional[str]) -> tuple[tuple[str, str], ...]:
        if not tx_hash:
            return ()
        return ((label, self._explorer_tx_url + tx_hash),)

    def _send(self, notification: NotificationMessage) -> None:
        self._notification_service.notify(notification)
        self._logger.debug("trade_notification_sent", notification_event_type=notification.event_type)

    def _on_swap_detected(self, event: SwapDetectedEvent) -> None:
        symbol = event.incoming_asset_symbol or event.incoming_asset_address
        self._send(
            NotificationMessage(
                event_type="swap_detected",
                message=f"Target swapped into {symbol}",
                payload={
                    "source_tx_hash": event.source_tx_hash,
                    "incoming_asset": event.incoming_asset_address,
                    "incoming_symbol": event.incoming_asset_symbol,
                    "outgoing_asset": event.outgoing_asset_address,
                    "outgoing_symbol": event.outgoing_asset_symbol,
                },
                links=self._tx_link("Target transaction", event.source_tx_hash),
            )
        )

    def _on_broadcast(self, event: TradeBroadcastEvent) -> None:
        sell_amount_eth = Web3.from_wei(event.sell_amount_wei, "ether")
        self._send(
            NotificationMessage(
                event_type="trade_broadcast",
                message=f"Buying {event.token_address} for {sell_amount_eth} ETH",
                payload={
                    "source_tx_hash": event.source_tx_hash,
                    "broadcast_hash": event.broadcast_hash,
                    "token_address": event.token_address,
                    "sell_amount_eth": f"{sell_amount_eth} ETH",
                    "gas_limit": event.gas_limit,
                },
                links=self._tx_link("Copy transaction", event.broadcast_hash),
            )
        )

    def _on_confirmed(self, event: TradeConfirmedEvent) -> None:
        self._send(
            NotificationMessage(
                event_type="trade_confirmed",
                message=f"Copy trade confirmed in block {event.block_number}",
                payload={
                    "source_tx_hash": event.source_tx_hash,
                    "broadcast_hash": event.broadcast_hash,
                    "token_address": event.token_address,
                    "block_number": event.block_number,
                },
                links=self._tx_link("Copy transaction", event.broadcast_hash),
            )
        )

    def _on_failed(self, event: TradeFailedEvent) -> None:
        label = _STAGE_LABELS.get(event.stage, event.stage)
        self._send(
            NotificationMessage(
                event_type="trade_failed",
                message=f"{label}: {event.error_message}",
                payload={
                    "stage": event.stage,
                    "source_tx_hash": event.source_tx_hash,
                    "token_address": event.token_address,
                    "error_message": event.error_message,
                    "broadcast_hash": event.broadcast_hash,
                },
                links=self._tx_link("Copy transaction", event.broadcast_hash)
                or self._tx_link("Target transaction", event.source_tx_hash),
            )
        )

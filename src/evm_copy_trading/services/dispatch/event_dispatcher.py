# -*- coding: utf-8 -*-
"""EventDispatcher: runs one webhook notification through the copy-trade pipeline.

Pipeline per notification: network filter, empty/unhashed filter, duplicate
admission, receipt reconciliation, swap classification, trade execution.
Each accepted notification is processed in its own task so a slow quote or
broadcast never delays acknowledgement or other notifications.
"""

from __future__ import annotations

import asyncio
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from evm_copy_trading.events.trades import SwapDetectedEvent
from evm_copy_trading.exceptions import AuthenticationError, TradeExecutionError
from evm_copy_trading.models.webhook_event import WebhookEvent
from evm_copy_trading.utils.signature import verify_signature

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from evm_copy_trading.config import Settings
    from evm_copy_trading.persistence.repositories.interfaces import (
        ISeenTransactionRepository,
    )
    from evm_copy_trading.services.classification import SwapClassifier
    from evm_copy_trading.services.reconciliation import TransferReconciler
    from evm_copy_trading.services.trade_execution import TradeExecutor


class DispatchOutcome(StrEnum):
    """Terminal state of one notification."""

    IGNORED_NETWORK = "ignored_network"
    IGNORED_EMPTY = "ignored_empty"
    IGNORED_NO_TX_HASH = "ignored_no_tx_hash"
    DUPLICATE = "duplicate"
    NOT_A_SWAP = "not_a_swap"
    COMPLETED = "completed"
    FAILED = "failed"


class EventDispatcher:
    """Authenticates, admits and processes webhook notifications."""

    _event_bus: Optional["EventBus"]

    def __init__(
        self,
        settings: "Settings",
        seen_transaction_repository: "ISeenTransactionRepository",
        reconciler: "TransferReconciler",
        classifier: "SwapClassifier",
        executor: "TradeExecutor",
        event_bus: Optional[Any] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._seen = seen_transaction_repository
        self._reconciler = reconciler
        self._classifier = classifier
        self._executor = executor
        self._event_bus = event_bus
        self._tasks: set[asyncio.Task[DispatchOutcome]] = set()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def authenticate(self, body: bytes, signature: Optional[str]) -> None:
        """Check the notification signature against the raw body.

        No-op when no signing key is configured.

        Raises:
            AuthenticationError: If a signing key is set and the signature is missing or wrong.
        """
        signing_key = self._settings.server.signing_key
        if not signing_key:
            return
        if not verify_signature(signing_key, body, signature):
            self._logger.warning("webhook_signature_invalid", signature_present=bool(signature))
            raise AuthenticationError("Invalid webhook signature")

    def submit(self, payload: Any) -> asyncio.Task[DispatchOutcome]:
        """Schedule process(payload) in the background and return its task."""
        task = asyncio.create_task(self.process(payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def process(self, payload: Any) -> DispatchOutcome:
        """Run one decoded notification through the pipeline. Never raises."""
        event = WebhookEvent.from_payload(payload)
        if event is None:
            self._logger.debug("webhook_ignored_empty", reason="no_event")
            return DispatchOutcome.IGNORED_EMPTY

        with bound_contextvars(tx_hash=event.tx_hash, network=event.network):
            try:
                return await self._process_event(event)
            except Exception as e:
                self._logger.exception(
                    "webhook_processing_error",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                return DispatchOutcome.FAILED

    async def aclose(self, timeout: Optional[float] = None) -> None:
        """Wait for in-flight notifications; cancel whatever is left after timeout."""
        pending = list(self._tasks)
        if not pending:
            return
        done, still_running = await asyncio.wait(pending, timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
        self._logger.debug(
            "event_dispatcher_closed",
            completed=len(done),
            cancelled=len(still_running),
        )

    async def _process_event(self, event: WebhookEvent) -> DispatchOutcome:
        if event.network != self._settings.chain.network:
            self._logger.debug("webhook_ignored_network", expected=self._settings.chain.network)
            return DispatchOutcome.IGNORED_NETWORK

        if event.raw_activity_count == 0:
            self._logger.debug("webhook_ignored_empty", reason="no_activity")
            return DispatchOutcome.IGNORED_EMPTY

        if event.tx_hash is None:
            self._logger.debug("webhook_ignored_no_tx_hash")
            return DispatchOutcome.IGNORED_NO_TX_HASH
        tx_hash = event.tx_hash

        if not await self._seen.admit(tx_hash):
            self._logger.debug("webhook_duplicate")
            return DispatchOutcome.DUPLICATE

        transfers = await self._reconciler.reconcile(event)
        result = self._classifier.classify(transfers)
        if result.candidate is None:
            self._logger.debug(
                "transaction_not_a_swap",
                reason=result.reason,
                unique_outgoing=result.unique_outgoing,
                unique_incoming=result.unique_incoming,
                explorer_url=self._settings.chain.explorer_tx_url + tx_hash,
            )
            return DispatchOutcome.NOT_A_SWAP

        candidate = result.candidate
        self._logger.info(
            "swap_detected",
            incoming_asset=candidate.incoming_asset_address,
            incoming_symbol=candidate.incoming_asset_symbol,
            outgoing_asset=candidate.outgoing_asset_address,
            outgoing_symbol=candidate.outgoing_asset_symbol,
        )
        if self._event_bus is not None:
            self._event_bus.dispatch(
                SwapDetectedEvent(
                    source_tx_hash=tx_hash,
                    incoming_asset_address=candidate.incoming_asset_address,
                    outgoing_asset_address=candidate.outgoing_asset_address,
                    incoming_asset_symbol=candidate.incoming_asset_symbol,
                    outgoing_asset_symbol=candidate.outgoing_asset_symbol,
                )
            )

        try:
            await self._executor.execute(candidate, source_tx_hash=tx_hash)
        except TradeExecutionError as e:
            self._logger.error(
                "copy_trade_failed",
                token_address=e.token_address,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return DispatchOutcome.FAILED
        return DispatchOutcome.COMPLETED

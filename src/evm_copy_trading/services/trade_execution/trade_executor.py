# -*- coding: utf-8 -*-
"""Trade executor: quote, sign and broadcast a fixed-size native buy of a token."""

from __future__ import annotations

import asyncio
from decimal import ROUND_FLOOR, Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from web3 import Web3

from evm_copy_trading.events.trades import (
    FailureStage,
    TradeBroadcastEvent,
    TradeConfirmedEvent,
    TradeFailedEvent,
)
from evm_copy_trading.exceptions import BroadcastError, QuoteError
from evm_copy_trading.models.trade_attempt import TradeAttempt
from evm_copy_trading.services.trade_execution.dto import SwapQuote
from evm_copy_trading.utils.validation import mask_address

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from evm_copy_trading.clients import ChainClient, ZeroExClient
    from evm_copy_trading.config import Settings
    from evm_copy_trading.models.swap import SwapCandidate


class TradeExecutor:
    """Buys the incoming asset of a swap candidate with a fixed amount of native currency.

    execute() returns as soon as the funding transaction is broadcast; confirmation
    is tracked in a background task that reports through the event bus.
    """

    _event_bus: Optional["EventBus"]

    def __init__(
        self,
        settings: "Settings",
        zerox_client: "ZeroExClient",
        chain_client: "ChainClient",
        event_bus: Optional[Any] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._zerox = zerox_client
        self._chain = chain_client
        self._event_bus = event_bus
        self._sell_amount_wei = int(Web3.to_wei(Decimal(settings.trading.buy_amount_eth), "ether"))
        self._confirmations: set[asyncio.Task[None]] = set()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def sell_amount_wei(self) -> int:
        return self._sell_amount_wei

    @property
    def pending_confirmations(self) -> int:
        return len(self._confirmations)

    def gas_limit(self, estimated_gas: int) -> int:
        """Aggregator gas estimate scaled by the configured multiplier, floored."""
        multiplier = Decimal(str(self._settings.trading.gas_limit_multiplier))
        return int((Decimal(estimated_gas) * multiplier).to_integral_value(rounding=ROUND_FLOOR))

    def build_transaction(self, quote: SwapQuote) -> dict[str, Any]:
        """EIP-1559 transaction from the quote with the configured fee caps."""
        trading = self._settings.trading
        return {
            "to": Web3.to_checksum_address(quote.to),
            "data": quote.data,
            "value": quote.value,
            "gas": self.gas_limit(quote.gas),
            "maxFeePerGas": trading.max_fee_per_gas,
            "maxPriorityFeePerGas": trading.max_priority_fee_per_gas,
            "type": 2,
        }

    async def execute(self, candidate: "SwapCandidate", *, source_tx_hash: str) -> str:
        """Quote, sign and broadcast the copy buy for candidate.incoming_asset_address.

        Returns:
            Hash of the broadcast funding transaction.

        Raises:
            QuoteError: If no usable quote could be obtained. Nothing is broadcast.
            BroadcastError: If building, signing or sending the transaction failed.
        """
        token = candidate.incoming_asset_address
        attempt = TradeAttempt(
            source_tx_hash=source_tx_hash,
            token_address=token,
            sell_amount_wei=self._sell_amount_wei,
        )

        try:
            response = await self._zerox.get_quote(
                buy_token=token,
                sell_amount_wei=self._sell_amount_wei,
                taker=self._chain.wallet_address,
            )
            quote = SwapQuote.from_response(response, token_address=token)
        except QuoteError as e:
            self._fail(attempt, "quote", str(e))
            raise

        try:
            tx = self.build_transaction(quote)
            broadcast_hash = await self._chain.send_transaction(tx)
        except Exception as e:
            self._fail(attempt, "broadcast", str(e))
            raise BroadcastError(
                f"Funding transaction failed: {e}", token_address=token, cause=e
            ) from e

        attempt.broadcast_hash = broadcast_hash
        self._logger.info(
            "trade_broadcast",
            token_address=token,
            broadcast_hash=broadcast_hash,
            sell_amount_wei=self._sell_amount_wei,
            gas_limit=tx["gas"],
            wallet_masked=mask_address(self._chain.wallet_address),
        )
        self._dispatch(
            TradeBroadcastEvent(
                source_tx_hash=source_tx_hash,
                broadcast_hash=broadcast_hash,
                token_address=token,
                sell_amount_wei=self._sell_amount_wei,
                gas_limit=tx["gas"],
            )
        )

        task = asyncio.create_task(self._track_confirmation(attempt))
        self._confirmations.add(task)
        task.add_done_callback(self._confirmations.discard)
        return broadcast_hash

    async def wait_for_confirmations(self) -> None:
        """Wait until every in-flight confirmation task has finished."""
        while self._confirmations:
            await asyncio.gather(*list(self._confirmations), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel confirmation tracking that is still running."""
        pending = list(self._confirmations)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            self._logger.debug("trade_confirmations_cancelled", count=len(pending))

    async def _track_confirmation(self, attempt: TradeAttempt) -> None:
        """Wait for one confirmation of the funding transaction and report the outcome."""
        broadcast_hash = attempt.broadcast_hash or ""
        try:
            receipt = await self._chain.wait_for_receipt(broadcast_hash)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._fail(attempt, "confirmation", f"Receipt polling failed: {e}")
            return

        if not receipt.succeeded:
            self._fail(attempt, "confirmation", "reverted")
            return

        block_number = receipt.block_number or 0
        attempt.mark_confirmed(block_number)
        self._logger.info(
            "trade_confirmed",
            token_address=attempt.token_address,
            broadcast_hash=broadcast_hash,
            block_number=block_number,
            explorer_url=self._settings.chain.explorer_tx_url + broadcast_hash,
        )
        self._dispatch(
            TradeConfirmedEvent(
                source_tx_hash=attempt.source_tx_hash,
                broadcast_hash=broadcast_hash,
                token_address=attempt.token_address,
                block_number=block_number,
            )
        )

    def _fail(self, attempt: TradeAttempt, stage: FailureStage, reason: str) -> None:
        attempt.mark_failed(reason)
        self._logger.warning(
            "trade_failed",
            stage=stage,
            token_address=attempt.token_address,
            broadcast_hash=attempt.broadcast_hash,
            error_message=reason,
        )
        self._dispatch(
            TradeFailedEvent(
                stage=stage,
                source_tx_hash=attempt.source_tx_hash,
                token_address=attempt.token_address,
                error_message=reason,
                broadcast_hash=attempt.broadcast_hash,
            )
        )

    def _dispatch(self, event: Any) -> None:
        if self._event_bus is None:
            return
        self._event_bus.dispatch(event)

# -*- coding: utf-8 -*-
"""TransferReconciler: completes a notification's transfer list from the transaction receipt.

Address-activity notifications may carry only one side of a swap (typically the
outgoing token). When fewer token transfers than configured are present, the
receipt is fetched and every ERC-20 Transfer log in it is appended as a token
record.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Optional

import structlog

from evm_copy_trading.exceptions import NodeUnavailableError
from evm_copy_trading.models.transfer import TransferRecord
from evm_copy_trading.utils.validation import is_hex_address

if TYPE_CHECKING:
    from evm_copy_trading.clients.chain_client import ChainClient, LogEntry, TransactionReceipt
    from evm_copy_trading.config import Settings
    from evm_copy_trading.models.webhook_event import WebhookEvent

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"

_TOPIC_HEX_LENGTH = 66


def _topic_to_address(topic: str) -> Optional[str]:
    """Last 20 bytes of a 32-byte indexed topic, or None if the topic is not a full word."""
    if len(topic) != _TOPIC_HEX_LENGTH or not topic.startswith("0x"):
        return None
    address = "0x" + topic[-40:]
    return address if is_hex_address(address) else None


def decode_transfer_logs(logs: Iterable[LogEntry]) -> list[TransferRecord]:
    """Decode Transfer(address,address,uint256) logs into token records.

    Logs with fewer than three topics, a different first topic, or topics that
    are not 32-byte words are skipped. The emitting contract is the asset.
    """
    records: list[TransferRecord] = []
    for log in logs:
        if len(log.topics) < 3 or log.topics[0].lower() != TRANSFER_TOPIC:
            continue
        from_address = _topic_to_address(log.topics[1].lower())
        to_address = _topic_to_address(log.topics[2].lower())
        if from_address is None or to_address is None or not log.address:
            continue
        records.append(TransferRecord.token_transfer(from_address, to_address, log.address))
    return records


class TransferReconciler:
    """Augments incomplete notifications with transfers decoded from the receipt."""

    def __init__(
        self,
        chain_client: ChainClient,
        settings: Settings,
        *,
        sleep: Callable[[float], Any] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._chain = chain_client
        self._min_token_transfers = settings.tracking.min_token_transfers
        self._retry_delay = settings.tracking.receipt_retry_delay_seconds
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def reconcile(self, event: WebhookEvent) -> list[TransferRecord]:
        """Return the notification's transfers, plus decoded receipt transfers if needed.

        The receipt is fetched only when the notification has fewer token transfers
        than the configured minimum. A failed fetch is retried once after a short
        delay; if both attempts fail, the original transfers are returned unchanged.
        """
        transfers = list(event.activity)
        if event.tx_hash is None or event.token_transfer_count >= self._min_token_transfers:
            return transfers

        receipt = await self._fetch_receipt(event.tx_hash)
        if receipt is None:
            return transfers

        decoded = decode_transfer_logs(receipt.logs)
        self._logger.debug(
            "reconciler_receipt_decoded",
            notification_token_transfers=event.token_transfer_count,
            receipt_logs=len(receipt.logs),
            decoded_transfers=len(decoded),
        )
        return transfers + decoded

    async def _fetch_receipt(self, tx_hash: str) -> Optional[TransactionReceipt]:
        try:
            return await self._chain.get_transaction_receipt(tx_hash)
        except NodeUnavailableError as e:
            self._logger.debug(
                "reconciler_receipt_retry",
                retry_delay_seconds=self._retry_delay,
                error_message=str(e),
            )

        await self._sleep(self._retry_delay)
        try:
            return await self._chain.get_transaction_receipt(tx_hash)
        except NodeUnavailableError as e:
            self._logger.warning(
                "reconciler_receipt_unavailable",
                error_type=type(e.cause).__name__ if e.cause else type(e).__name__,
                error_message=str(e),
            )
            return None

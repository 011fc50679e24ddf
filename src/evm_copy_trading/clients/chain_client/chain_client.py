# -*- coding: utf-8 -*-
"""Async chain node client (web3.py): receipts, signing and broadcast."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

import aiohttp
import structlog
from eth_account import Account
from web3 import AsyncWeb3
from web3.exceptions import TransactionNotFound

from evm_copy_trading.clients.chain_client.schema import TransactionReceipt, to_hex_str
from evm_copy_trading.exceptions import MissingRequiredConfigError, NodeUnavailableError
from evm_copy_trading.utils.validation import mask_address

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount

    from evm_copy_trading.config import Settings


def _build_web3(settings: Settings) -> AsyncWeb3:
    """Build an AsyncWeb3 over HTTP from settings.chain."""
    chain = settings.chain
    if not chain.rpc_url:
        raise MissingRequiredConfigError("CHAIN__RPC_URL")
    return AsyncWeb3(
        AsyncWeb3.AsyncHTTPProvider(
            chain.rpc_url,
            request_kwargs={"timeout": aiohttp.ClientTimeout(total=chain.rpc_timeout_seconds)},
        )
    )


def _build_account(settings: Settings) -> "LocalAccount":
    if not settings.chain.private_key:
        raise MissingRequiredConfigError("CHAIN__PRIVATE_KEY")
    return Account.from_key(settings.chain.private_key)


class ChainClient:
    """Async facade over web3.py for the few node calls the pipeline needs.

    Sends are serialized behind a lock so concurrent trades never reuse a nonce.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        web3: Optional[AsyncWeb3] = None,
        account: Optional["LocalAccount"] = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize from settings or injected web3/account objects.

        Args:
            settings: Application settings (chain section).
            web3: Optional pre-built AsyncWeb3. If None, built from settings.chain.rpc_url.
            account: Optional signing account. If None, built from settings.chain.private_key.
            sleep: Awaitable sleep used between confirmation polls (injectable for tests).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._w3 = web3 if web3 is not None else _build_web3(settings)
        self._account = account if account is not None else _build_account(settings)
        self._sleep = sleep
        self._send_lock = asyncio.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def wallet_address(self) -> str:
        """Checksum address of the signing wallet."""
        return self._account.address

    async def get_transaction_receipt(self, tx_hash: str) -> TransactionReceipt:
        """Fetch a receipt by hash.

        Raises:
            NodeUnavailableError: If the node errors, times out, or does not know the hash yet.
        """
        try:
            raw = await self._w3.eth.get_transaction_receipt(tx_hash)  # type: ignore[arg-type]
        except Exception as e:
            raise NodeUnavailableError(
                f"Receipt fetch failed for {tx_hash}: {e}", cause=e
            ) from e
        return TransactionReceipt.from_web3(raw)

    async def send_transaction(self, tx: dict[str, Any]) -> str:
        """Fill nonce/chainId/from, sign with the wallet key and broadcast.

        Returns:
            0x transaction hash, as soon as the node accepts the raw transaction.
        """
        async with self._send_lock:
            nonce = await self._w3.eth.get_transaction_count(self.wallet_address, "pending")
            full_tx: dict[str, Any] = {
                **tx,
                "from": self.wallet_address,
                "nonce": nonce,
                "chainId": self._settings.chain.chain_id,
            }
            signed = self._account.sign_transaction(full_tx)
            tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
        hash_hex = to_hex_str(tx_hash)
        self._logger.debug(
            "chain_transaction_sent",
            tx_hash=hash_hex,
            nonce=nonce,
            wallet_masked=mask_address(self.wallet_address),
        )
        return hash_hex

    async def wait_for_receipt(
        self,
        tx_hash: str,
        *,
        poll_seconds: Optional[float] = None,
    ) -> TransactionReceipt:
        """Poll until the transaction is mined (one confirmation).

        There is no overall timeout: the call returns once the node reports a
        receipt, and any node error other than "not found yet" is raised.
        """
        interval = poll_seconds if poll_seconds is not None else self._settings.chain.receipt_poll_seconds
        while True:
            try:
                raw = await self._w3.eth.get_transaction_receipt(tx_hash)  # type: ignore[arg-type]
            except TransactionNotFound:
                await self._sleep(interval)
                continue
            if raw is None:
                await self._sleep(interval)
                continue
            return TransactionReceipt.from_web3(raw)

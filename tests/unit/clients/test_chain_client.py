# -*- coding: utf-8 -*-
"""Unit tests for ChainClient (web3 and account are faked)."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock, Mock

import pytest
from web3.exceptions import TransactionNotFound

from evm_copy_trading.clients.chain_client import ChainClient
from evm_copy_trading.config import Settings
from evm_copy_trading.exceptions import MissingRequiredConfigError, NodeUnavailableError

_WALLET = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


def _raw_receipt(tx_hash: str, *, status: int = 1, logs: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {
        "transactionHash": bytes.fromhex(tx_hash[2:]),
        "blockNumber": 42,
        "status": status,
        "logs": logs or [],
    }


def _client(settings: Settings, eth: Any, sleep: Any | None = None) -> ChainClient:
    account = Mock()
    account.address = _WALLET
    account.sign_transaction = Mock(return_value=SimpleNamespace(raw_transaction=b"\x02signed"))
    return ChainClient(
        settings,
        web3=cast(Any, SimpleNamespace(eth=eth)),
        account=account,
        sleep=sleep or AsyncMock(),
    )


async def test_get_transaction_receipt_decodes_logs(settings: Settings, tx_hash: str) -> None:
    topic = bytes.fromhex("dd" * 32)
    eth = SimpleNamespace(
        get_transaction_receipt=AsyncMock(
            return_value=_raw_receipt(
                tx_hash,
                logs=[{"address": "0xABC0000000000000000000000000000000000001", "topics": [topic]}],
            )
        )
    )

    receipt = await _client(settings, eth).get_transaction_receipt(tx_hash)

    assert receipt.tx_hash == tx_hash
    assert receipt.block_number == 42
    assert receipt.succeeded
    assert receipt.logs[0].address == "0xabc0000000000000000000000000000000000001"
    assert receipt.logs[0].topics == ("0x" + "dd" * 32,)


async def test_get_transaction_receipt_wraps_node_errors(settings: Settings, tx_hash: str) -> None:
    eth = SimpleNamespace(get_transaction_receipt=AsyncMock(side_effect=TransactionNotFound("nope")))

    with pytest.raises(NodeUnavailableError):
        await _client(settings, eth).get_transaction_receipt(tx_hash)


async def test_send_transaction_fills_nonce_and_chain_id(settings: Settings) -> None:
    eth = SimpleNamespace(
        get_transaction_count=AsyncMock(return_value=7),
        send_raw_transaction=AsyncMock(return_value=bytes.fromhex("12" * 32)),
    )
    client = _client(settings, eth)

    tx_hash = await client.send_transaction({"to": _WALLET, "value": 1, "gas": 21000})

    assert tx_hash == "0x" + "12" * 32
    eth.get_transaction_count.assert_awaited_once_with(_WALLET, "pending")
    signed_tx = cast(Any, client)._account.sign_transaction.call_args.args[0]
    assert signed_tx["nonce"] == 7
    assert signed_tx["chainId"] == 8453
    assert signed_tx["from"] == _WALLET
    eth.send_raw_transaction.assert_awaited_once_with(b"\x02signed")


async def test_concurrent_sends_are_serialized(settings: Settings) -> None:
    in_flight = 0
    max_in_flight = 0

    async def _count(*_: Any) -> int:
        nonlocal in_flight, max_in_flight
        in_flight += 1
        max_in_flight = max(max_in_flight, in_flight)
        await asyncio.sleep(0)
        return 1

    async def _send(_: bytes) -> bytes:
        nonlocal in_flight
        await asyncio.sleep(0)
        in_flight -= 1
        return bytes(32)

    eth = SimpleNamespace(get_transaction_count=_count, send_raw_transaction=_send)
    client = _client(settings, eth)

    await asyncio.gather(*(client.send_transaction({"value": 0}) for _ in range(5)))

    assert max_in_flight == 1


async def test_wait_for_receipt_polls_until_mined(settings: Settings, tx_hash: str) -> None:
    eth = SimpleNamespace(
        get_transaction_receipt=AsyncMock(
            side_effect=[TransactionNotFound("pending"), None, _raw_receipt(tx_hash, status=0)]
        )
    )
    sleep = AsyncMock()

    receipt = await _client(settings, eth, sleep).wait_for_receipt(tx_hash, poll_seconds=0.25)

    assert not receipt.succeeded
    assert sleep.await_count == 2
    sleep.assert_awaited_with(0.25)


def test_missing_rpc_url_raises(settings_factory: Any) -> None:
    settings = settings_factory(chain={"rpc_url": ""})

    with pytest.raises(MissingRequiredConfigError):
        ChainClient(settings)

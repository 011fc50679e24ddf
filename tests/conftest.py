# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from evm_copy_trading.config import Settings
from evm_copy_trading.persistence.repositories.in_memory import (
    InMemorySeenTransactionRepository,
)

# Anvil's first development key; never funded on a real network.
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_WALLET_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def wallet_address() -> str:
    """Checksum address of TEST_PRIVATE_KEY (the bot wallet)."""
    return TEST_WALLET_ADDRESS


@pytest.fixture
def target_wallet() -> str:
    """Watched address (lower-case, as stored after normalization)."""
    return "0x00000000000000000000000000000000000000aa"


@pytest.fixture
def counterparty() -> str:
    """Pool/router address on the other side of the watched address's transfers."""
    return "0x00000000000000000000000000000000000000cc"


@pytest.fixture
def token_out() -> str:
    """Token the watched address sells in the default swap."""
    return "0x1111111111111111111111111111111111111111"


@pytest.fixture
def token_in() -> str:
    """Token the watched address buys in the default swap."""
    return "0x000000000000000000000000000000000000beef"


@pytest.fixture
def tx_hash() -> str:
    """Hash of the watched address's transaction."""
    return "0x" + "ab" * 32


@pytest.fixture
def settings_factory(target_wallet: str) -> Callable[..., Settings]:
    """Build Settings with required values filled in; sections can be overridden as dicts."""

    def _build(**sections: Any) -> Settings:
        defaults: dict[str, dict[str, Any]] = {
            "tracking": {"target_wallet": target_wallet, "receipt_retry_delay_seconds": 0.0},
            "chain": {
                "rpc_url": "http://localhost:8545",
                "private_key": TEST_PRIVATE_KEY,
                "receipt_poll_seconds": 0.05,
            },
            "aggregator": {"api_key": "test-0x-key"},
            "server": {"signing_key": None},
            "telegram": {"enabled": False},
            "console": {"enabled": False},
        }
        for name, values in sections.items():
            defaults[name] = {**defaults.get(name, {}), **values}
        return Settings.from_env(**defaults)

    return _build


@pytest.fixture
def settings(settings_factory: Callable[..., Settings]) -> Settings:
    """Settings with test defaults."""
    return settings_factory()


@pytest.fixture
def activity_factory(
    target_wallet: str,
    counterparty: str,
) -> Callable[..., dict[str, Any]]:
    """Build one webhook activity entry (token transfer by default)."""

    def _build(
        *,
        direction: str = "out",
        contract: str | None = None,
        category: str = "token",
        asset: str | None = None,
        value: Any = 1.5,
        hash: str | None = None,
    ) -> dict[str, Any]:
        from_address, to_address = (
            (target_wallet, counterparty) if direction == "out" else (counterparty, target_wallet)
        )
        item: dict[str, Any] = {
            "fromAddress": from_address,
            "toAddress": to_address,
            "category": category,
            "value": value,
            "asset": asset,
        }
        if hash is not None:
            item["hash"] = hash
        if contract is not None:
            item["rawContract"] = {"address": contract}
        return item

    return _build


@pytest.fixture
def payload_factory(tx_hash: str) -> Callable[..., dict[str, Any]]:
    """Build a webhook body {"event": {"network": ..., "activity": [...]}}."""

    def _build(
        activity: list[dict[str, Any]],
        *,
        network: str = "BASE_MAINNET",
        hash: str | None = None,
    ) -> dict[str, Any]:
        items = [dict(a) for a in activity]
        if items and "hash" not in items[0]:
            items[0]["hash"] = hash or tx_hash
        return {"event": {"network": network, "activity": items}}

    return _build


@pytest.fixture
def seen_repo() -> InMemorySeenTransactionRepository:
    """Fresh in-memory seen-transaction repository per test."""
    return InMemorySeenTransactionRepository(ttl_seconds=60.0)


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return EventBus(
        name="EvmCopyTradingTests",
        max_history_size=200,
        wal_path=None,
    )

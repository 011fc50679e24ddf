# -*- coding: utf-8 -*-
"""Unit tests for Settings."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from evm_copy_trading.config import Settings, TradingSettings


def test_defaults_match_base_mainnet() -> None:
    settings = Settings.from_env()

    assert settings.chain.chain_id == 8453
    assert settings.chain.network == "BASE_MAINNET"
    assert settings.trading.buy_amount_eth == "0.0001"
    assert settings.trading.slippage_bps == 5000
    assert settings.trading.max_fee_per_gas == 200_000_000
    assert settings.trading.max_priority_fee_per_gas == 50_000_000
    assert settings.aggregator.timeout_seconds == 3.0
    assert settings.tracking.dedup_ttl_seconds == 60.0


def test_blacklist_is_parsed_and_lowercased() -> None:
    trading = TradingSettings(blacklist_tokens=" 0xAbC , ,0xDEF")

    assert trading.blacklist_tokens == frozenset({"0xabc", "0xdef"})


def test_blacklist_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRADING__BLACKLIST_TOKENS", "0xAAA,0xBBB")

    settings = Settings()

    assert settings.trading.blacklist_tokens == frozenset({"0xaaa", "0xbbb"})


def test_webhook_paths_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVER__WEBHOOK_PATHS", '["/alchemy", "/hooks/base"]')

    settings = Settings()

    assert settings.server.webhook_paths == ("/alchemy", "/hooks/base")


def test_missing_required_lists_unset_values() -> None:
    settings = Settings.from_env(
        tracking={"target_wallet": ""},
        chain={"rpc_url": "", "private_key": None},
        aggregator={"api_key": None},
    )

    assert settings.missing_required() == [
        "TRACKING__TARGET_WALLET",
        "CHAIN__RPC_URL",
        "CHAIN__PRIVATE_KEY",
        "AGGREGATOR__API_KEY",
    ]


def test_missing_required_is_empty_when_configured(settings_factory: Callable[..., Settings]) -> None:
    assert settings_factory().missing_required() == []

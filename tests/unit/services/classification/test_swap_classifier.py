# -*- coding: utf-8 -*-
"""Unit tests for swap classification."""

from __future__ import annotations

import itertools
from collections.abc import Callable

import pytest

from evm_copy_trading.config import Settings
from evm_copy_trading.models import TransferCategory, TransferRecord
from evm_copy_trading.services.classification import SwapClassifier, classify_swap
from evm_copy_trading.utils.validation import ZERO_ADDRESS


@pytest.fixture
def transfer(
    target_wallet: str,
    counterparty: str,
) -> Callable[..., TransferRecord]:
    """Build a token transfer relative to the watched address."""

    def _build(
        contract: str | None,
        *,
        direction: str = "out",
        symbol: str | None = None,
        category: TransferCategory = TransferCategory.TOKEN,
    ) -> TransferRecord:
        from_address, to_address = (
            (target_wallet, counterparty) if direction == "out" else (counterparty, target_wallet)
        )
        return TransferRecord(
            category=category,
            from_address=from_address,
            to_address=to_address,
            asset_contract_address=contract,
            asset_symbol=symbol,
        )

    return _build


def test_single_out_single_in_is_a_swap(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
    token_out: str,
) -> None:
    result = classify_swap(
        [transfer(token_out, symbol="USDC"), transfer(token_in, direction="in", symbol="BEEF")],
        target_wallet,
    )

    assert result.is_swap
    assert result.candidate is not None
    assert result.candidate.incoming_asset_address == token_in
    assert result.candidate.outgoing_asset_address == token_out
    assert result.candidate.incoming_asset_symbol == "BEEF"
    assert result.candidate.outgoing_asset_symbol == "USDC"


def test_native_transfers_are_ignored(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
    token_out: str,
) -> None:
    transfers = [
        transfer(token_out),
        transfer(None, direction="out", category=TransferCategory.NATIVE),
        transfer(token_in, direction="in"),
        transfer(None, direction="in", category=TransferCategory.INTERNAL),
    ]

    result = classify_swap(transfers, target_wallet)

    assert result.candidate is not None
    assert result.candidate.incoming_asset_address == token_in


def test_two_incoming_assets_are_ambiguous(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
    token_out: str,
) -> None:
    other = "0x2222222222222222222222222222222222222222"

    result = classify_swap(
        [transfer(token_out), transfer(token_in, direction="in"), transfer(other, direction="in")],
        target_wallet,
    )

    assert not result.is_swap
    assert result.reason == "ambiguous_sides"
    assert (result.unique_outgoing, result.unique_incoming) == (1, 2)


def test_missing_outgoing_side_is_ambiguous(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
) -> None:
    result = classify_swap([transfer(token_in, direction="in")], target_wallet)

    assert result.reason == "ambiguous_sides"
    assert (result.unique_outgoing, result.unique_incoming) == (0, 1)


def test_duplicate_records_of_same_asset_count_once(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
    token_out: str,
) -> None:
    transfers = [
        transfer(token_out),
        transfer(token_out.upper().replace("0X", "0x").lower()),
        transfer(token_in, direction="in"),
        transfer(token_in, direction="in", symbol="BEEF"),
    ]

    result = classify_swap(transfers, target_wallet)

    assert result.candidate is not None
    assert result.candidate.incoming_asset_symbol == "BEEF"


def test_conflicting_symbols_pick_the_same_display_symbol_in_any_order(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
    token_out: str,
) -> None:
    transfers = [
        transfer(token_out, symbol="WETH"),
        transfer(token_out, symbol="ETH"),
        transfer(token_in, direction="in", symbol="BEEF"),
        transfer(token_in, direction="in", symbol="BEEF2"),
    ]

    forward = classify_swap(transfers, target_wallet)
    backward = classify_swap(list(reversed(transfers)), target_wallet)

    assert forward == backward
    assert forward.candidate is not None
    assert forward.candidate.outgoing_asset_symbol == "ETH"
    assert forward.candidate.incoming_asset_symbol == "BEEF"


def test_result_does_not_depend_on_order(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
    token_out: str,
) -> None:
    transfers = [
        transfer(token_out, symbol="USDC"),
        transfer(token_in, direction="in", symbol="BEEF"),
        transfer(token_in, direction="in"),
        transfer(None, category=TransferCategory.NATIVE),
    ]

    results = {
        classify_swap(list(order), target_wallet).candidate
        for order in itertools.permutations(transfers)
    }

    assert len(results) == 1


def test_incoming_without_address_is_rejected(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_out: str,
) -> None:
    result = classify_swap([transfer(token_out), transfer(None, direction="in")], target_wallet)

    assert result.reason == "missing_incoming_address"


def test_zero_address_incoming_is_rejected(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_out: str,
) -> None:
    result = classify_swap(
        [transfer(token_out), transfer(ZERO_ADDRESS, direction="in")], target_wallet
    )

    assert result.reason == "native_incoming_asset"


def test_blacklisted_incoming_is_rejected_case_insensitively(
    transfer: Callable[..., TransferRecord],
    target_wallet: str,
    token_in: str,
    token_out: str,
) -> None:
    result = classify_swap(
        [transfer(token_out), transfer(token_in, direction="in")],
        target_wallet,
        blacklist={token_in.upper().replace("0X", "0x")},
    )

    assert result.reason == "blacklisted_incoming_asset"


def test_classifier_uses_settings(
    settings_factory: Callable[..., Settings],
    transfer: Callable[..., TransferRecord],
    token_in: str,
    token_out: str,
) -> None:
    classifier = SwapClassifier(settings_factory(trading={"blacklist_tokens": token_in}))

    result = classifier.classify([transfer(token_out), transfer(token_in, direction="in")])

    assert result.reason == "blacklisted_incoming_asset"

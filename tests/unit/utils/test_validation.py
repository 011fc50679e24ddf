# -*- coding: utf-8 -*-
"""Unit tests for address validation helpers."""

from __future__ import annotations

from typing import Any

import pytest

from evm_copy_trading.utils import is_hex_address, mask_address, normalize_address


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0x" + "a" * 40, True),
        ("0x" + "A" * 40, True),
        ("0x" + "g" * 40, False),
        ("0x" + "a" * 39, False),
        (None, False),
    ],
)
def test_is_hex_address(value: Any, expected: bool) -> None:
    assert is_hex_address(value) is expected


def test_normalize_address() -> None:
    assert normalize_address("  0xABC  ") == "0xabc"
    assert normalize_address("") is None
    assert normalize_address(123) is None


def test_mask_address() -> None:
    assert mask_address("0x1234567890abcdef") == "0x1234...cdef"
    assert mask_address(None) == "***"

"""Validation helpers for addresses."""

from __future__ import annotations

import string
from typing import Any

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
"""Placeholder used by indexers for the native asset (never a token contract)."""

_HEX_DIGITS = frozenset(string.hexdigits)


def is_hex_address(addr: Any) -> bool:
    """Return True if addr is 0x followed by 40 hex digits (any case)."""
    if not isinstance(addr, str):
        return False
    s = addr.strip()
    return len(s) == 42 and s[:2] in ("0x", "0X") and all(c in _HEX_DIGITS for c in s[2:])


def normalize_address(addr: Any) -> str | None:
    """Return a stripped, lower-cased address, or None when empty or not a string."""
    if not isinstance(addr, str):
        return None
    s = addr.strip().lower()
    return s or None


def mask_address(addr: str | None) -> str:
    """Return a masked address for logging (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"

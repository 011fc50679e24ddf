# -*- coding: utf-8 -*-
"""Utility modules."""

from evm_copy_trading.utils.signature import compute_signature, verify_signature
from evm_copy_trading.utils.validation import (
    ZERO_ADDRESS,
    is_hex_address,
    mask_address,
    normalize_address,
)

__all__ = [
    "ZERO_ADDRESS",
    "compute_signature",
    "is_hex_address",
    "mask_address",
    "normalize_address",
    "verify_signature",
]

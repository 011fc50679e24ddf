# -*- coding: utf-8 -*-
"""0x Swap API client."""

from evm_copy_trading.clients.zerox_client.schema import (
    QuoteResponseSchema,
    QuoteTransactionSchema,
)
from evm_copy_trading.clients.zerox_client.zerox_client import (
    NATIVE_TOKEN_ADDRESS,
    ZeroExClient,
)

__all__ = [
    "NATIVE_TOKEN_ADDRESS",
    "QuoteResponseSchema",
    "QuoteTransactionSchema",
    "ZeroExClient",
]

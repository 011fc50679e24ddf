# -*- coding: utf-8 -*-
"""Chain node client (web3.py)."""

from evm_copy_trading.clients.chain_client.chain_client import ChainClient
from evm_copy_trading.clients.chain_client.schema import (
    LogEntry,
    TransactionReceipt,
    to_hex_str,
)

__all__ = ["ChainClient", "LogEntry", "TransactionReceipt", "to_hex_str"]

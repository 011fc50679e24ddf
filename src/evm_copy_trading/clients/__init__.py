"""HTTP, aggregator and chain node clients."""

from evm_copy_trading.clients.chain_client import ChainClient
from evm_copy_trading.clients.http import AsyncHttpClient
from evm_copy_trading.clients.zerox_client import ZeroExClient

__all__ = [
    "AsyncHttpClient",
    "ChainClient",
    "ZeroExClient",
]

"""EVM copy trading: webhook-driven copying of single-asset swaps via the 0x aggregator."""

from evm_copy_trading.clients import AsyncHttpClient, ChainClient, ZeroExClient
from evm_copy_trading.config import Settings, get_settings
from evm_copy_trading.DI import Container
from evm_copy_trading.services.dispatch import DispatchOutcome, EventDispatcher

__version__ = "0.0.1"
__all__ = [
    "AsyncHttpClient",
    "ChainClient",
    "Container",
    "DispatchOutcome",
    "EventDispatcher",
    "Settings",
    "ZeroExClient",
    "get_settings",
]

"""Exceptions subpackage."""

from evm_copy_trading.exceptions.exceptions import (
    ApiError,
    AuthenticationError,
    BroadcastError,
    CopyTradingError,
    MissingRequiredConfigError,
    NodeUnavailableError,
    QuoteError,
    TradeExecutionError,
)

__all__ = [
    "ApiError",
    "AuthenticationError",
    "BroadcastError",
    "CopyTradingError",
    "MissingRequiredConfigError",
    "NodeUnavailableError",
    "QuoteError",
    "TradeExecutionError",
]

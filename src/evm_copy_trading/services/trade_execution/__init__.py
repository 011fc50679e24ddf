"""Copy-buy execution through the 0x aggregator."""

from evm_copy_trading.services.trade_execution.dto import SwapQuote
from evm_copy_trading.services.trade_execution.trade_executor import TradeExecutor

__all__ = ["SwapQuote", "TradeExecutor"]

# -*- coding: utf-8 -*-
"""Copy-trade events."""

from evm_copy_trading.events.trades.trade_events import (
    FailureStage,
    SwapDetectedEvent,
    TradeBroadcastEvent,
    TradeConfirmedEvent,
    TradeFailedEvent,
)

__all__ = [
    "FailureStage",
    "SwapDetectedEvent",
    "TradeBroadcastEvent",
    "TradeConfirmedEvent",
    "TradeFailedEvent",
]

# -*- coding: utf-8 -*-
"""Event bus and event types."""

from evm_copy_trading.events.bus import get_event_bus, set_event_bus
from evm_copy_trading.events.trades import (
    SwapDetectedEvent,
    TradeBroadcastEvent,
    TradeConfirmedEvent,
    TradeFailedEvent,
)

__all__ = [
    "get_event_bus",
    "set_event_bus",
    "SwapDetectedEvent",
    "TradeBroadcastEvent",
    "TradeConfirmedEvent",
    "TradeFailedEvent",
]

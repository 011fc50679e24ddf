"""Webhook notification dispatch."""

from evm_copy_trading.services.dispatch.event_dispatcher import (
    DispatchOutcome,
    EventDispatcher,
)

__all__ = ["DispatchOutcome", "EventDispatcher"]

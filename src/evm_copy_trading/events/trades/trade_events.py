"""Copy-trade lifecycle events (emitted by EventDispatcher and TradeExecutor)."""

from __future__ import annotations

from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]

FailureStage = Literal["quote", "broadcast", "confirmation"]


class SwapDetectedEvent(BaseEvent[None]):
    """Emitted when a watched-address transaction classifies as a swap."""

    source_tx_hash: str
    incoming_asset_address: str
    outgoing_asset_address: str | None = None
    incoming_asset_symbol: str | None = None
    outgoing_asset_symbol: str | None = None


class TradeBroadcastEvent(BaseEvent[None]):
    """Emitted once the funding transaction has been accepted by the node."""

    source_tx_hash: str
    broadcast_hash: str
    token_address: str
    sell_amount_wei: int
    gas_limit: int


class TradeConfirmedEvent(BaseEvent[None]):
    """Emitted by the background confirmation task when the funding transaction is mined."""

    source_tx_hash: str
    broadcast_hash: str
    token_address: str
    block_number: int


class TradeFailedEvent(BaseEvent[None]):
    """Emitted when a copy trade ends without a confirmed funding transaction."""

    stage: FailureStage
    source_tx_hash: str
    token_address: str
    error_message: str
    broadcast_hash: str | None = None

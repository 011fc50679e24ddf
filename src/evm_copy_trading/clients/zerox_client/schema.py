"""Schema for 0x Swap API v2 quote responses (fields used by this service)."""

from __future__ import annotations

from typing import NotRequired, TypedDict


class QuoteTransactionSchema(TypedDict):
    """Unsigned transaction returned with a firm quote."""

    to: str
    data: str
    value: str
    gas: NotRequired[str | None]
    gasPrice: NotRequired[str | None]


class QuoteResponseSchema(TypedDict, total=False):
    """GET /swap/allowance-holder/quote response."""

    liquidityAvailable: bool
    buyToken: str
    sellToken: str
    buyAmount: str
    minBuyAmount: str
    sellAmount: str
    transaction: QuoteTransactionSchema
    zid: str

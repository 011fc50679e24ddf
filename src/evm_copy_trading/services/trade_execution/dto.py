"""Models for trade execution."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from evm_copy_trading.exceptions import QuoteError
from evm_copy_trading.utils.validation import is_hex_address

if TYPE_CHECKING:
    from evm_copy_trading.clients.zerox_client import QuoteResponseSchema


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(str(value), 0) if isinstance(value, str) and value.startswith("0x") else int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class SwapQuote:
    """Executable part of an aggregator quote: the transaction to sign and its gas estimate."""

    to: str
    data: str
    value: int
    gas: int
    buy_amount: str | None = None
    min_buy_amount: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_response(cls, response: QuoteResponseSchema, *, token_address: str) -> SwapQuote:
        """Validate a 0x quote response.

        Raises:
            QuoteError: If liquidity is unavailable or the transaction fields are missing.
        """
        if response.get("liquidityAvailable") is False:
            raise QuoteError("No liquidity available for token", token_address=token_address)
        tx = response.get("transaction")
        if not isinstance(tx, dict):
            raise QuoteError("Quote has no transaction", token_address=token_address)

        to = tx.get("to")
        data = tx.get("data")
        value = _to_int(tx.get("value", 0))
        gas = _to_int(tx.get("gas"))
        if not is_hex_address(to) or not isinstance(data, str) or value is None:
            raise QuoteError("Quote transaction is malformed", token_address=token_address)
        if gas is None or gas <= 0:
            raise QuoteError("Quote has no gas estimate", token_address=token_address)

        buy_amount = response.get("buyAmount")
        min_buy_amount = response.get("minBuyAmount")
        return cls(
            to=str(to),
            data=data,
            value=value,
            gas=gas,
            buy_amount=str(buy_amount) if buy_amount is not None else None,
            min_buy_amount=str(min_buy_amount) if min_buy_amount is not None else None,
        )

"""TransferRecord: one asset movement observed in a transaction.

Records come from two sources: the activity list of an address-activity webhook
and ERC-20 Transfer logs decoded from the transaction receipt. Both are turned
into the same frozen record at the ingestion boundary; anything that cannot be
read safely is dropped there instead of being passed downstream.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from collections.abc import Mapping
from typing import Any, cast

from evm_copy_trading.utils.validation import normalize_address


class TransferCategory(StrEnum):
    """Kind of asset movement. Only TOKEN takes part in swap classification."""

    NATIVE = "native"
    TOKEN = "token"
    INTERNAL = "internal"
    OTHER = "other"


# Activity categories as sent by the webhook provider.
_CATEGORY_ALIASES: dict[str, TransferCategory] = {
    "token": TransferCategory.TOKEN,
    "erc20": TransferCategory.TOKEN,
    "external": TransferCategory.NATIVE,
    "native": TransferCategory.NATIVE,
    "internal": TransferCategory.INTERNAL,
}


def parse_category(value: str) -> TransferCategory:
    """Map a provider category string onto TransferCategory (unknown -> OTHER)."""
    return _CATEGORY_ALIASES.get(value.strip().lower(), TransferCategory.OTHER)


def _parse_amount(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class TransferRecord:
    """A single asset movement. Addresses are stored lower-cased."""

    category: TransferCategory
    from_address: str | None
    to_address: str | None
    asset_contract_address: str | None = None
    """Canonical asset identity. Required for classification."""
    asset_symbol: str | None = None
    amount: Decimal | None = None
    """Informational only; never used for sizing."""

    @property
    def is_token(self) -> bool:
        return self.category is TransferCategory.TOKEN

    @classmethod
    def from_activity(cls, item: Any) -> TransferRecord | None:
        """Build from one webhook activity entry, or None if the entry is malformed.

        Contract address is read from ``rawContract.address`` with ``tokenAddress``
        as fallback.
        """
        if not isinstance(item, Mapping):
            return None
        data = cast(Mapping[str, Any], item)
        category = data.get("category")
        if not isinstance(category, str) or not category.strip():
            return None

        contract: str | None = None
        raw_contract = data.get("rawContract")
        if isinstance(raw_contract, Mapping):
            contract = normalize_address(cast(Mapping[str, Any], raw_contract).get("address"))
        if contract is None:
            contract = normalize_address(data.get("tokenAddress"))

        symbol = data.get("asset")
        return cls(
            category=parse_category(category),
            from_address=normalize_address(data.get("fromAddress")),
            to_address=normalize_address(data.get("toAddress")),
            asset_contract_address=contract,
            asset_symbol=symbol if isinstance(symbol, str) and symbol else None,
            amount=_parse_amount(data.get("value")),
        )

    @classmethod
    def token_transfer(
        cls,
        from_address: str,
        to_address: str,
        asset_contract_address: str,
    ) -> TransferRecord:
        """Build a token record decoded from a Transfer log."""
        return cls(
            category=TransferCategory.TOKEN,
            from_address=normalize_address(from_address),
            to_address=normalize_address(to_address),
            asset_contract_address=normalize_address(asset_contract_address),
        )

"""TradeAttempt: one copy-buy initiated for an admitted notification."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class TradeStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(slots=True)
class TradeAttempt:
    """Funding transaction state. In-memory only; one per admitted notification.

    Status moves PENDING -> CONFIRMED or PENDING -> FAILED exactly once.
    """

    source_tx_hash: str
    """Transaction of the watched address that triggered the copy."""
    token_address: str
    sell_amount_wei: int
    broadcast_hash: str | None = None
    status: TradeStatus = TradeStatus.PENDING
    block_number: int | None = None
    failure_reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_final(self) -> bool:
        return self.status is not TradeStatus.PENDING

    def mark_confirmed(self, block_number: int) -> None:
        if self.is_final:
            raise ValueError(f"trade attempt already {self.status}")
        self.status = TradeStatus.CONFIRMED
        self.block_number = block_number

    def mark_failed(self, reason: str) -> None:
        if self.is_final:
            raise ValueError(f"trade attempt already {self.status}")
        self.status = TradeStatus.FAILED
        self.failure_reason = reason

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

"""Chain node data shapes (decoded from web3 AttributeDicts)."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any


def to_hex_str(value: Any) -> str:
    """Return a 0x-prefixed lower-case hex string for bytes or str values."""
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    s = str(value).strip().lower()
    return s if s.startswith("0x") else "0x" + s


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One event log: emitting contract and ordered topics (0x hex strings)."""

    address: str
    topics: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_web3(cls, log: Mapping[str, Any]) -> LogEntry:
        return cls(
            address=str(log.get("address") or "").lower(),
            topics=tuple(to_hex_str(t) for t in (log.get("topics") or [])),
        )


@dataclass(frozen=True, slots=True)
class TransactionReceipt:
    """Subset of an eth_getTransactionReceipt result."""

    tx_hash: str
    block_number: int | None
    status: int | None
    logs: tuple[LogEntry, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    @classmethod
    def from_web3(cls, receipt: Mapping[str, Any]) -> TransactionReceipt:
        block = receipt.get("blockNumber")
        status = receipt.get("status")
        return cls(
            tx_hash=to_hex_str(receipt.get("transactionHash") or ""),
            block_number=int(block) if block is not None else None,
            status=int(status) if status is not None else None,
            logs=tuple(LogEntry.from_web3(log) for log in (receipt.get("logs") or [])),
        )

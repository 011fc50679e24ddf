"""Swap classification results."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

RejectionReason = Literal[
    "ambiguous_sides",
    "missing_incoming_address",
    "native_incoming_asset",
    "blacklisted_incoming_asset",
]


@dataclass(frozen=True, slots=True)
class SwapCandidate:
    """A transaction believed to be a single-asset exchange by the watched address."""

    incoming_asset_address: str
    """What the watched address acquired; this is what gets copy-bought."""
    outgoing_asset_address: str | None
    incoming_asset_symbol: str | None = None
    outgoing_asset_symbol: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Outcome of one classification pass: a candidate or a rejection reason."""

    candidate: SwapCandidate | None
    reason: RejectionReason | None
    unique_outgoing: int
    unique_incoming: int

    @property
    def is_swap(self) -> bool:
        return self.candidate is not None

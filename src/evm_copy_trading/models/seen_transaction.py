"""SeenTransaction: record of an admitted webhook transaction (deduplication entry).

Identity is tx_hash (lower-cased). Lives in memory only, for dedup_ttl_seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta


@dataclass(frozen=True, slots=True)
class SeenTransaction:
    """A transaction hash that has been admitted for processing."""

    tx_hash: str
    """Lower-cased 0x transaction hash."""
    seen_at: datetime
    """When the transaction was first admitted."""
    expires_at: datetime
    """Earliest time the hash may be admitted again."""

    @classmethod
    def create(
        cls,
        tx_hash: str,
        *,
        ttl_seconds: float,
        seen_at: datetime | None = None,
    ) -> SeenTransaction:
        """Create a new SeenTransaction record."""
        tx_hash = tx_hash.strip().lower()
        if not tx_hash:
            raise ValueError("tx_hash must be non-empty")
        seen = seen_at or datetime.now(UTC)
        return cls(
            tx_hash=tx_hash,
            seen_at=seen,
            expires_at=seen + timedelta(seconds=ttl_seconds),
        )

"""Abstract interface for seen transaction storage (deduplication of webhook deliveries)."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ISeenTransactionRepository(ABC):
    """Remembers admitted transaction hashes for a bounded time.

    Only an atomic check-and-insert is exposed so callers cannot race a
    separate lookup against a separate insert.
    """

    @abstractmethod
    async def admit(self, tx_hash: str) -> bool:
        """Register tx_hash and return True if it was not already present (or had expired).

        Return False if tx_hash was admitted within the retention window, or if
        the store cannot take another hash without forgetting a live one.
        """
        ...

"""In-memory repository implementations."""

from evm_copy_trading.persistence.repositories.in_memory.seen_transaction_repository import (
    InMemorySeenTransactionRepository,
)

__all__ = ["InMemorySeenTransactionRepository"]

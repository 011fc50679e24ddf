"""Persistence layer (repositories, etc.)."""

from evm_copy_trading.persistence.repositories import (
    InMemorySeenTransactionRepository,
    ISeenTransactionRepository,
)

__all__ = [
    "ISeenTransactionRepository",
    "InMemorySeenTransactionRepository",
]

# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, etc.)."""

from evm_copy_trading.persistence.repositories.interfaces import (
    ISeenTransactionRepository,
)
from evm_copy_trading.persistence.repositories.in_memory import (
    InMemorySeenTransactionRepository,
)

__all__ = [
    "ISeenTransactionRepository",
    "InMemorySeenTransactionRepository",
]

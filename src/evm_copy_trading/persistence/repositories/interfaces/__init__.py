# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/."""

from evm_copy_trading.persistence.repositories.interfaces.seen_transaction_repository import (
    ISeenTransactionRepository,
)

__all__ = ["ISeenTransactionRepository"]

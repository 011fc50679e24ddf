# -*- coding: utf-8 -*-
"""In-memory seen transaction repository (TTL cache keyed by lower-cased tx hash)."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Optional

import structlog
from cachetools import TTLCache

from evm_copy_trading.models.seen_transaction import SeenTransaction
from evm_copy_trading.persistence.repositories.interfaces.seen_transaction_repository import (
    ISeenTransactionRepository,
)


def _key(tx_hash: str) -> str:
    """Normalize key for storage."""
    return tx_hash.strip().lower()


class InMemorySeenTransactionRepository(ISeenTransactionRepository):
    """In-memory implementation of ISeenTransactionRepository.

    Entries expire ttl_seconds after insertion (cachetools.TTLCache purges lazily
    on access and insert). A live entry is never evicted: when maxsize live
    hashes are held, new hashes are refused until older ones expire.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = 60.0,
        maxsize: int = 100_000,
        timer: Callable[[], float] = time.monotonic,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            ttl_seconds: Retention window for each admitted hash.
            maxsize: Upper bound on live remembered hashes.
            timer: Clock used for expiry (injectable for tests).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl_seconds = ttl_seconds
        self._store: TTLCache[str, SeenTransaction] = TTLCache(
            maxsize=max(1, maxsize), ttl=ttl_seconds, timer=timer
        )
        self._lock = threading.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def admit(self, tx_hash: str) -> bool:
        """Atomically register tx_hash. No await happens while the lock is held."""
        k = _key(tx_hash)
        if not k:
            raise ValueError("tx_hash must be non-empty")
        with self._lock:
            if k in self._store:
                return False
            self._store.expire()
            if len(self._store) >= self._store.maxsize:
                self._logger.warning(
                    "seen_transaction_store_full",
                    tx_hash=k,
                    maxsize=self._store.maxsize,
                )
                return False
            self._store[k] = SeenTransaction.create(
                k, ttl_seconds=self._ttl_seconds, seen_at=datetime.now(UTC)
            )
            return True

    def __len__(self) -> int:
        with self._lock:
            self._store.expire()
            return len(self._store)

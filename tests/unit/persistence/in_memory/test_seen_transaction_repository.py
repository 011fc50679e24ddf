# -*- coding: utf-8 -*-
"""Unit tests for InMemorySeenTransactionRepository."""

from __future__ import annotations

import asyncio

import pytest

from evm_copy_trading.persistence.repositories.in_memory import (
    InMemorySeenTransactionRepository,
)


class _Clock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def test_first_admit_returns_true_then_false(
    seen_repo: InMemorySeenTransactionRepository,
    tx_hash: str,
) -> None:
    assert await seen_repo.admit(tx_hash) is True
    assert await seen_repo.admit(tx_hash) is False
    assert len(seen_repo) == 1


async def test_admit_is_case_insensitive(
    seen_repo: InMemorySeenTransactionRepository,
    tx_hash: str,
) -> None:
    assert await seen_repo.admit(tx_hash.upper().replace("0X", "0x")) is True
    assert await seen_repo.admit(f"  {tx_hash}  ") is False


async def test_admit_rejects_empty_hash(seen_repo: InMemorySeenTransactionRepository) -> None:
    with pytest.raises(ValueError):
        await seen_repo.admit("   ")


async def test_hash_is_admitted_again_after_ttl(tx_hash: str) -> None:
    clock = _Clock()
    repo = InMemorySeenTransactionRepository(ttl_seconds=60.0, timer=clock)

    assert await repo.admit(tx_hash) is True
    clock.now += 59.0
    assert await repo.admit(tx_hash) is False
    clock.now += 2.0
    assert await repo.admit(tx_hash) is True


async def test_expired_entries_do_not_count(tx_hash: str) -> None:
    clock = _Clock()
    repo = InMemorySeenTransactionRepository(ttl_seconds=10.0, timer=clock)
    await repo.admit(tx_hash)
    await repo.admit("0x" + "cd" * 32)

    clock.now += 11.0

    assert len(repo) == 0


async def test_concurrent_admits_let_exactly_one_through(
    seen_repo: InMemorySeenTransactionRepository,
    tx_hash: str,
) -> None:
    results = await asyncio.gather(*(seen_repo.admit(tx_hash) for _ in range(50)))

    assert results.count(True) == 1
    assert results.count(False) == 49


def test_non_positive_ttl_is_rejected() -> None:
    with pytest.raises(ValueError):
        InMemorySeenTransactionRepository(ttl_seconds=0)


async def test_full_store_never_forgets_live_hashes() -> None:
    clock = _Clock()
    repo = InMemorySeenTransactionRepository(ttl_seconds=60.0, maxsize=2, timer=clock)

    assert await repo.admit("0xa") is True
    assert await repo.admit("0xb") is True
    assert await repo.admit("0xc") is False

    clock.now += 1.0
    assert await repo.admit("0xa") is False
    assert await repo.admit("0xb") is False

    clock.now += 60.0
    assert await repo.admit("0xc") is True
    assert await repo.admit("0xa") is True

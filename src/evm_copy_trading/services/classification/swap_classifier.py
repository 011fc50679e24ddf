"""Swap classification: decides whether a transfer set is a single-asset swap by the watched address."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import TYPE_CHECKING

from evm_copy_trading.models.swap import ClassificationResult, RejectionReason, SwapCandidate
from evm_copy_trading.utils.validation import ZERO_ADDRESS, normalize_address

if TYPE_CHECKING:
    from evm_copy_trading.config import Settings
    from evm_copy_trading.models.transfer import TransferRecord


def _prefer_symbol(candidate: str | None, current: str | None) -> bool:
    if not candidate:
        return False
    return not current or candidate < current


def _unique_by_asset(transfers: Iterable[TransferRecord]) -> dict[str, TransferRecord]:
    """One representative per asset, keyed by lower-cased contract ("" when missing).

    A record that carries a symbol wins over one that does not, and among
    records with differing symbols the smallest symbol wins, so the result does
    not depend on the order in which the receipt and the notification list them.
    """
    unique: dict[str, TransferRecord] = {}
    for t in transfers:
        key = t.asset_contract_address or ""
        current = unique.get(key)
        if current is None or _prefer_symbol(t.asset_symbol, current.asset_symbol):
            unique[key] = t
    return unique


def classify_swap(
    transfers: Iterable[TransferRecord],
    watched_address: str,
    blacklist: Collection[str] = frozenset(),
) -> ClassificationResult:
    """Classify a transaction's transfers relative to the watched address.

    Only token transfers count. A swap needs exactly one distinct outgoing asset
    and exactly one distinct incoming asset; the incoming asset must have a
    contract address that is neither the zero address nor blacklisted.
    Pure function: order and duplicates in ``transfers`` do not change the result.
    """
    watched = normalize_address(watched_address) or ""
    tokens = [t for t in transfers if t.is_token]
    outgoing = _unique_by_asset(t for t in tokens if t.from_address == watched)
    incoming = _unique_by_asset(t for t in tokens if t.to_address == watched)

    def reject(reason: RejectionReason) -> ClassificationResult:
        return ClassificationResult(
            candidate=None,
            reason=reason,
            unique_outgoing=len(outgoing),
            unique_incoming=len(incoming),
        )

    if len(outgoing) != 1 or len(incoming) != 1:
        return reject("ambiguous_sides")

    (incoming_key, incoming_record), = incoming.items()
    (outgoing_key, outgoing_record), = outgoing.items()
    if not incoming_key:
        return reject("missing_incoming_address")
    if incoming_key == ZERO_ADDRESS:
        return reject("native_incoming_asset")
    if incoming_key in {b.lower() for b in blacklist}:
        return reject("blacklisted_incoming_asset")

    return ClassificationResult(
        candidate=SwapCandidate(
            incoming_asset_address=incoming_key,
            outgoing_asset_address=outgoing_key or None,
            incoming_asset_symbol=incoming_record.asset_symbol,
            outgoing_asset_symbol=outgoing_record.asset_symbol,
        ),
        reason=None,
        unique_outgoing=1,
        unique_incoming=1,
    )


class SwapClassifier:
    """Binds classify_swap to the configured watched address and blacklist."""

    def __init__(self, settings: Settings) -> None:
        self._watched_address = normalize_address(settings.tracking.target_wallet) or ""
        self._blacklist = settings.trading.blacklist_tokens

    @property
    def watched_address(self) -> str:
        return self._watched_address

    def classify(self, transfers: Iterable[TransferRecord]) -> ClassificationResult:
        return classify_swap(transfers, self._watched_address, self._blacklist)

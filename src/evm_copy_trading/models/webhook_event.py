"""WebhookEvent: validated view of an address-activity notification payload."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping
from typing import Any, cast

from evm_copy_trading.models.transfer import TransferRecord


@dataclass(frozen=True, slots=True)
class WebhookEvent:
    """Notification body ``{"event": {"network": ..., "activity": [...]}}``.

    tx_hash is taken from the first activity entry; activity entries that are
    not readable transfer records are dropped.
    """

    network: str | None
    tx_hash: str | None
    activity: tuple[TransferRecord, ...] = field(default_factory=tuple)
    raw_activity_count: int = 0

    @property
    def token_transfer_count(self) -> int:
        return sum(1 for t in self.activity if t.is_token)

    @classmethod
    def from_payload(cls, payload: Any) -> WebhookEvent | None:
        """Parse a decoded JSON body. Returns None if there is no ``event`` object."""
        if not isinstance(payload, Mapping):
            return None
        event = cast(Mapping[str, Any], payload).get("event")
        if not isinstance(event, Mapping):
            return None
        event_d = cast(Mapping[str, Any], event)

        network = event_d.get("network")
        raw_activity = event_d.get("activity")
        items: list[Any] = (
            cast(list[Any], raw_activity) if isinstance(raw_activity, list) else []
        )

        tx_hash: str | None = None
        if items and isinstance(items[0], Mapping):
            h = cast(Mapping[str, Any], items[0]).get("hash")
            if isinstance(h, str) and h.strip():
                tx_hash = h.strip().lower()

        records = tuple(
            r for r in (TransferRecord.from_activity(item) for item in items) if r is not None
        )
        return cls(
            network=network if isinstance(network, str) else None,
            tx_hash=tx_hash,
            activity=records,
            raw_activity_count=len(items),
        )

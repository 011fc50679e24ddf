"""HMAC-SHA256 webhook signatures."""

from __future__ import annotations

import hashlib
import hmac

SIGNATURE_PREFIX = "sha256="


def compute_signature(signing_key: str, body: bytes) -> str:
    """Return the hex HMAC-SHA256 digest of body."""
    return hmac.new(signing_key.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_signature(signing_key: str, body: bytes, header: str | None) -> bool:
    """Return True if header carries the HMAC of body.

    Accepts both ``sha256=<hex>`` and a bare hex digest. Comparison is constant-time.
    """
    if not header:
        return False
    received = header.strip()
    if received.lower().startswith(SIGNATURE_PREFIX):
        received = received[len(SIGNATURE_PREFIX):]
    expected = compute_signature(signing_key, body)
    return hmac.compare_digest(received.lower(), expected)

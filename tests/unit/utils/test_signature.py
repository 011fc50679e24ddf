# -*- coding: utf-8 -*-
"""Unit tests for webhook signature helpers."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from evm_copy_trading.utils import compute_signature, verify_signature

_KEY = "whsec_test"
_BODY = b'{"webhookId":"wh_1","event":{"network":"BASE_MAINNET"}}'


def test_compute_signature_is_hmac_sha256_hex() -> None:
    expected = hmac.new(_KEY.encode(), _BODY, hashlib.sha256).hexdigest()

    assert compute_signature(_KEY, _BODY) == expected


@pytest.mark.parametrize(
    "header",
    [
        compute_signature(_KEY, _BODY),
        compute_signature(_KEY, _BODY).upper(),
        "sha256=" + compute_signature(_KEY, _BODY),
        "  sha256=" + compute_signature(_KEY, _BODY) + " ",
    ],
)
def test_verify_signature_accepts_valid_forms(header: str) -> None:
    assert verify_signature(_KEY, _BODY, header)


@pytest.mark.parametrize(
    "header",
    [None, "", "sha256=", compute_signature("other", _BODY), compute_signature(_KEY, _BODY + b" ")],
)
def test_verify_signature_rejects_invalid(header: str | None) -> None:
    assert not verify_signature(_KEY, _BODY, header)

"""Swap classification of a transaction's transfers."""

from evm_copy_trading.services.classification.swap_classifier import (
    SwapClassifier,
    classify_swap,
)

__all__ = ["SwapClassifier", "classify_swap"]

"""Receipt-based completion of notification transfer lists."""

from evm_copy_trading.services.reconciliation.transfer_reconciler import (
    TRANSFER_TOPIC,
    TransferReconciler,
    decode_transfer_logs,
)

__all__ = ["TRANSFER_TOPIC", "TransferReconciler", "decode_transfer_logs"]

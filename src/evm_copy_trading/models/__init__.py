"""Domain models."""

from evm_copy_trading.models.seen_transaction import SeenTransaction
from evm_copy_trading.models.swap import (
    ClassificationResult,
    RejectionReason,
    SwapCandidate,
)
from evm_copy_trading.models.trade_attempt import TradeAttempt, TradeStatus
from evm_copy_trading.models.transfer import (
    TransferCategory,
    TransferRecord,
    parse_category,
)
from evm_copy_trading.models.webhook_event import WebhookEvent

__all__ = [
    "ClassificationResult",
    "RejectionReason",
    "SeenTransaction",
    "SwapCandidate",
    "TradeAttempt",
    "TradeStatus",
    "TransferCategory",
    "TransferRecord",
    "WebhookEvent",
    "parse_category",
]

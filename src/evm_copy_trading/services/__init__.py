# -*- coding: utf-8 -*-
"""Application services."""

from evm_copy_trading.services.classification import SwapClassifier, classify_swap
from evm_copy_trading.services.dispatch import DispatchOutcome, EventDispatcher
from evm_copy_trading.services.notifications import TradeNotifier
from evm_copy_trading.services.reconciliation import TransferReconciler, decode_transfer_logs
from evm_copy_trading.services.trade_execution import SwapQuote, TradeExecutor

__all__ = [
    "DispatchOutcome",
    "EventDispatcher",
    "SwapClassifier",
    "SwapQuote",
    "TradeExecutor",
    "TradeNotifier",
    "TransferReconciler",
    "classify_swap",
    "decode_transfer_logs",
]

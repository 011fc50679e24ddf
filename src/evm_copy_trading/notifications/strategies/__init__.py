"""Notification strategies."""

from evm_copy_trading.notifications.strategies.base import BaseNotificationStrategy
from evm_copy_trading.notifications.strategies.console import ConsoleNotifier
from evm_copy_trading.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]

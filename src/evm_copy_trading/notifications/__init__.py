"""Notification subsystem."""

from evm_copy_trading.notifications.notification_manager import NotificationService
from evm_copy_trading.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from evm_copy_trading.notifications.stylers import EventNotificationStyler
from evm_copy_trading.notifications.types import (
    NotificationEventType,
    NotificationMessage,
    NotificationStyler,
)

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "EventNotificationStyler",
    "NotificationEventType",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
    "TelegramNotifier",
]

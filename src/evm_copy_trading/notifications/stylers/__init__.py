"""Notification stylers."""

from evm_copy_trading.notifications.stylers.notification_styler import (
    EventNotificationStyler,
)

__all__ = ["EventNotificationStyler"]

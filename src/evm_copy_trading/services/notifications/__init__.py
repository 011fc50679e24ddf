"""Notification-related services."""

from evm_copy_trading.services.notifications.trade_notifier import TradeNotifier

__all__ = ["TradeNotifier"]

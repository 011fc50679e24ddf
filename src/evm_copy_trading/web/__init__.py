"""Inbound HTTP surface."""

from evm_copy_trading.web.server import WebhookServer, create_app

__all__ = ["WebhookServer", "create_app"]

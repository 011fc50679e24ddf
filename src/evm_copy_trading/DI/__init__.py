"""Dependency injection."""

from evm_copy_trading.DI.container import Container

__all__ = ["Container"]

"""Custom exceptions for the copy-trading pipeline."""

from __future__ import annotations


class CopyTradingError(Exception):
    """Base exception for copy-trading errors."""

    pass


class MissingRequiredConfigError(CopyTradingError):
    """Raised when a required configuration value is missing."""

    pass


class ApiError(CopyTradingError):
    """Raised when an HTTP API request fails (transport error, timeout or error status)."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        body: object | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body
        self.cause = cause


class AuthenticationError(CopyTradingError):
    """Raised when a webhook signature is missing or does not match the signing key."""

    pass


class NodeUnavailableError(CopyTradingError):
    """Raised when the chain node cannot serve a request (receipt fetch, nonce, broadcast)."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class TradeExecutionError(CopyTradingError):
    """Base for failures that end a copy-trade attempt."""

    def __init__(
        self,
        message: str,
        *,
        token_address: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.token_address = token_address
        self.cause = cause


class QuoteError(TradeExecutionError):
    """Raised when the aggregator is unreachable, times out or returns no route."""

    pass


class BroadcastError(TradeExecutionError):
    """Raised when building, signing or sending the funding transaction fails."""

    pass

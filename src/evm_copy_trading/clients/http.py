# -*- coding: utf-8 -*-
"""Async HTTP client for JSON APIs (single attempt per request)."""

from __future__ import annotations

import asyncio
import json as jsonlib
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Mapping, Optional
from structlog.contextvars import bound_contextvars

from evm_copy_trading.config import Settings
from evm_copy_trading.exceptions import ApiError


async def _read_body(response: aiohttp.ClientResponse) -> Any:
    text = await response.text()
    try:
        return jsonlib.loads(text)
    except ValueError:
        return text


class AsyncHttpClient:
    """Async HTTP client for JSON APIs.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager. Requests are never retried; every failure
    surfaces as ApiError.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (uses settings.api.timeout_seconds).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Perform one GET request and return the decoded JSON body.

        Args:
            url: Full URL to request.
            params: Optional query parameters.
            headers: Optional extra request headers.
            timeout: Total timeout in seconds (defaults to the session timeout).

        Returns:
            Parsed JSON response (dict or list).

        Raises:
            ApiError: On timeout, transport error, non-2xx status or an undecodable body.
                status_code and body are set for HTTP error responses.
        """
        request_kwargs: Dict[str, Any] = {"params": params or {}}
        if headers:
            request_kwargs["headers"] = dict(headers)
        if timeout is not None:
            # Omitted otherwise: aiohttp reads timeout=None as "no timeout".
            request_kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

        with bound_contextvars(http_method="GET", http_url=url, http_request_id=uuid.uuid4().hex[:12]):
            try:
                session = await self._get_session()
                async with session.get(url, **request_kwargs) as response:
                    if response.status >= 400:
                        body = await _read_body(response)
                        self._logger.warning(
                            "http_get_failed",
                            http_status_code=response.status,
                            response_body=body,
                        )
                        raise ApiError(
                            f"GET {url} returned HTTP {response.status}",
                            url=url,
                            status_code=response.status,
                            body=body,
                        )
                    return await response.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                self._logger.warning(
                    "http_get_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise ApiError(f"GET {url} failed: {e!r}", url=url, cause=e) from e

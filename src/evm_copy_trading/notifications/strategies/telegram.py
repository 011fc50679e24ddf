# -*- coding: utf-8 -*-
"""Telegram notification strategy (async, python-telegram-bot)."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from telegram import Bot
from telegram.error import (
    BadRequest,
    Forbidden,
    RetryAfter,
    TelegramError,
)
from telegram.request import HTTPXRequest

from evm_copy_trading.notifications.strategies.base import BaseNotificationStrategy
from evm_copy_trading.notifications.types import NotificationMessage

if TYPE_CHECKING:
    from evm_copy_trading.config.config import Settings
    from evm_copy_trading.notifications.types import NotificationStyler

_RATE_WINDOW_SECONDS = 60.0
_MAX_BACKOFF_SECONDS = 60.0


class TelegramNotifier(BaseNotificationStrategy):
    """Send HTML notifications to one Telegram chat with rate limiting and retries."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        bot: Optional[Bot] = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Validate Telegram settings.

        Args:
            settings: Application settings (telegram section).
            styler: Renders messages to Telegram HTML.
            bot: Optional pre-built Bot; built on initialize() when None.
            sleep: Awaitable sleep used for rate limiting and backoff.
            clock: Monotonic clock for the per-minute window.

        Raises:
            ValueError: If Telegram is disabled or api_key/chat_id are missing.
        """
        super().__init__(settings)
        cfg = settings.telegram
        if not cfg.enabled or not cfg.api_key or not cfg.chat_id:
            raise ValueError("TelegramNotifier requires TELEGRAM__API_KEY and TELEGRAM__CHAT_ID.")

        self._styler = styler
        self._token = str(cfg.api_key)
        self._chat_id = str(cfg.chat_id)
        self._bot = bot
        self._sleep = sleep
        self._clock = clock
        self._sent_at: deque[float] = deque()
        self._running = False
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            self._logger.warning("telegram_already_running")
            return
        if self._bot is None:
            cfg = self.settings.telegram
            request = HTTPXRequest(
                connect_timeout=cfg.connect_timeout,
                read_timeout=cfg.read_timeout,
                write_timeout=cfg.write_timeout,
                pool_timeout=cfg.pool_timeout,
            )
            self._bot = Bot(token=self._token, request=request)
        self._running = True
        self._logger.debug("telegram_initialized")

    async def shutdown(self) -> None:
        self._running = False
        self._bot = None

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running or self._bot is None:
            self._logger.warning("telegram_not_running_cannot_send")
            return
        await self._send_text(self._styler.render(message, parse_html=True))

    def _backoff(self, attempt: int) -> float:
        base = self.settings.telegram.backoff_base_seconds
        return min(_MAX_BACKOFF_SECONDS, base * (2 ** (attempt - 1)))

    async def _send_text(self, text: str) -> None:
        assert self._bot is not None
        max_attempts = max(1, self.settings.telegram.max_retries)
        for attempt in range(1, max_attempts + 1):
            await self._wait_for_slot()
            try:
                await self._bot.send_message(
                    chat_id=self._chat_id,
                    text=text,
                    parse_mode="HTML",
                )
                self._sent_at.append(self._clock())
                return
            except RetryAfter as exc:
                retry_after = exc.retry_after
                delay = (
                    retry_after.total_seconds()
                    if hasattr(retry_after, "total_seconds")
                    else float(retry_after)
                )
                self._logger.warning("telegram_rate_limit_retry_after", retry_seconds=delay)
                await self._sleep(delay)
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_fatal_error",
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return
            except TelegramError as exc:
                backoff = self._backoff(attempt)
                self._logger.warning(
                    "telegram_send_retry",
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    backoff_seconds=backoff,
                )
                if attempt < max_attempts:
                    await self._sleep(backoff)

        self._logger.error("telegram_max_retries_exceeded_message_dropped")

    async def _wait_for_slot(self) -> None:
        """Block until sending stays within messages_per_minute."""
        limit = self.settings.telegram.messages_per_minute
        now = self._clock()
        while self._sent_at and self._sent_at[0] <= now - _RATE_WINDOW_SECONDS:
            self._sent_at.popleft()
        if len(self._sent_at) >= limit:
            wait = _RATE_WINDOW_SECONDS - (now - self._sent_at[0])
            if wait > 0:
                await self._sleep(wait)

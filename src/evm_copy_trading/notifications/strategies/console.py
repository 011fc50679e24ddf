# -*- coding: utf-8 -*-
"""Console notifier (print-based)."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from evm_copy_trading.notifications.strategies.base import BaseNotificationStrategy
from evm_copy_trading.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from evm_copy_trading.config import Settings
    from evm_copy_trading.notifications.types import NotificationStyler


class ConsoleNotifier(BaseNotificationStrategy):
    """Write plain-text notifications to a stream (stdout by default)."""

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(settings)
        self._styler = styler
        self._stream = stream
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._running or not self.settings.console.enabled:
            return
        print(
            self._styler.render(message, parse_html=False),
            file=self._stream or sys.stdout,
            flush=True,
        )

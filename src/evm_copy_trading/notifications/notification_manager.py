"""Notification service: fan-out of messages to every configured channel."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

import structlog

from evm_copy_trading.notifications.strategies import BaseNotificationStrategy
from evm_copy_trading.notifications.types import NotificationMessage


class NotificationService:
    """Queue notifications and deliver them from a single background worker.

    notify() never blocks the caller; a failing channel is logged and skipped
    so it cannot stop delivery to the others.
    """

    def __init__(
        self,
        notifiers: Sequence[BaseNotificationStrategy],
        *,
        queue_size: int = 1000,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        self._notifiers = list(notifiers)
        self._queue_size = queue_size
        self._queue: asyncio.Queue[NotificationMessage] | None = None
        self._worker_task: asyncio.Task[None] | None = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def notifiers(self) -> list[BaseNotificationStrategy]:
        return list(self._notifiers)

    async def initialize(self) -> None:
        """Initialize all notifiers and start the delivery worker."""
        for notifier in self._notifiers:
            await notifier.initialize()
        if not self._notifiers:
            self._logger.info("notification_init_no_notifiers")
            return
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._worker_task = asyncio.create_task(self._worker_loop())
        self._logger.debug(
            "notification_init_complete",
            notification_notifiers=[type(n).__name__ for n in self._notifiers],
            notification_queue_size=self._queue_size,
        )

    async def shutdown(self) -> None:
        """Deliver what is queued, stop the worker and close all notifiers."""
        if self._queue is not None:
            self._queue.shutdown()
            await self._queue.join()
        if self._worker_task is not None:
            await self._worker_task
            self._worker_task = None
        self._queue = None
        for notifier in self._notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_shutdown_complete")

    def notify(self, message: NotificationMessage) -> None:
        """Enqueue a notification. Dropped with a warning if the queue is full or closed."""
        queue = self._queue
        if queue is None:
            if self._notifiers:
                self._logger.warning(
                    "notification_service_not_running",
                    notification_event_type=message.event_type,
                )
            return
        try:
            queue.put_nowait(message)
        except (asyncio.QueueFull, asyncio.QueueShutDown):
            self._logger.warning(
                "notification_dropped",
                notification_event_type=message.event_type,
            )

    async def _worker_loop(self) -> None:
        queue = self._queue
        if queue is None:
            return
        while True:
            try:
                message = await queue.get()
            except asyncio.QueueShutDown:
                break
            try:
                await self._deliver(message)
            finally:
                queue.task_done()

    async def _deliver(self, message: NotificationMessage) -> None:
        for notifier in self._notifiers:
            try:
                await notifier.send_notification(message)
            except Exception as e:
                self._logger.exception(
                    "notification_channel_error",
                    notification_channel=type(notifier).__name__,
                    notification_event_type=message.event_type,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

"""Notification message types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

NotificationEventType = Literal[
    "swap_detected",
    "trade_broadcast",
    "trade_confirmed",
    "trade_failed",
    "system_started",
    "system_stopped",
]


@dataclass(frozen=True)
class NotificationMessage:
    """Message to be sent via one or more notification channels.

    links are (label, url) pairs rendered after the body, e.g. explorer links.
    """

    event_type: NotificationEventType | str
    message: str
    title: str | None = None
    payload: dict[str, Any] | None = None
    links: tuple[tuple[str, str], ...] = field(default_factory=tuple)


class NotificationStyler(Protocol):
    """Render a message into a formatted string for delivery."""

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        """Return the formatted text for message.

        Args:
            message: Notification message to render.
            parse_html: If True (default), output uses Telegram HTML tags. If False, plain text.
        """
        ...

# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji separators (Telegram-style)."""

from __future__ import annotations

import html
from typing import Any

from evm_copy_trading.notifications.types import NotificationMessage, NotificationStyler

_TITLES: dict[str, tuple[str, str]] = {
    "swap_detected": ("🔎", "Swap Detected"),
    "trade_broadcast": ("📤", "Copy Trade Sent"),
    "trade_confirmed": ("✅", "Copy Trade Confirmed"),
    "trade_failed": ("❌", "Copy Trade Failed"),
    "system_started": ("▶️", "System Started"),
    "system_stopped": ("⏹️", "System Stopped"),
}

# Rows per event type: (section header, [(row label, payload key)]).
_SECTIONS: dict[str, list[tuple[str, list[tuple[str, str]]]]] = {
    "swap_detected": [
        (
            "🔁 Swap",
            [
                ("📥 Bought", "incoming_asset"),
                ("🏷️ Symbol", "incoming_symbol"),
                ("📤 Sold", "outgoing_asset"),
                ("🏷️ Sold Symbol", "outgoing_symbol"),
            ],
        ),
        ("🔗 Source", [("🧾 Tx", "source_tx_hash")]),
    ],
    "trade_broadcast": [
        (
            "💰 Order",
            [
                ("🪙 Token", "token_address"),
                ("💵 Spend", "sell_amount_eth"),
                ("⛽ Gas Limit", "gas_limit"),
            ],
        ),
        ("🔗 Transactions", [("🧾 Funding", "broadcast_hash"), ("👀 Source", "source_tx_hash")]),
    ],
    "trade_confirmed": [
        (
            "💰 Order",
            [
                ("🪙 Token", "token_address"),
                ("📦 Block", "block_number"),
            ],
        ),
        ("🔗 Transactions", [("🧾 Funding", "broadcast_hash")]),
    ],
    "trade_failed": [
        (
            "⚠️ Failure",
            [
                ("🧭 Stage", "stage"),
                ("🪙 Token", "token_address"),
                ("📝 Error", "error_message"),
            ],
        ),
        ("🔗 Transactions", [("🧾 Funding", "broadcast_hash"), ("👀 Source", "source_tx_hash")]),
    ],
    "system_started": [
        (
            "👛 Wallets",
            [
                ("🎯 Target", "target_wallet"),
                ("🤖 Bot", "wallet"),
                ("🌐 Network", "network"),
            ],
        ),
    ],
}


class EventNotificationStyler(NotificationStyler):
    """Render notifications by event_type with emojis, separators and sections.

    With parse_html=True the output uses Telegram HTML (bold headings, anchor
    links, escaped values); otherwise it is plain text for terminals.
    """

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        emoji, title = self.title(message.event_type)
        if message.title:
            title = message.title
        payload = message.payload or {}

        parts = [f"{emoji} {self._bold(title, parse_html)}\n"]
        if message.message:
            parts.append(self._text(message.message, parse_html) + "\n")

        sections = _SECTIONS.get(message.event_type)
        if sections is None:
            rows = [(key, key) for key in sorted(payload.keys())]
            sections = [("ℹ️ Details", rows)] if rows else []
        for header, rows in sections:
            section = self._section(
                header,
                [(label, payload.get(key)) for label, key in rows],
                parse_html,
            )
            if section:
                parts.append(section)

        if message.links:
            parts.append(self._links(message.links, parse_html))

        return "\n".join(parts).strip()

    @staticmethod
    def title(event_type: str) -> tuple[str, str]:
        """Emoji and title for event_type (unknown types are title-cased)."""
        return _TITLES.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))

    def _section(self, header: str, rows: list[tuple[str, Any]], parse_html: bool) -> str:
        lines: list[str] = []
        for label, value in rows:
            if value is None or value == "":
                continue
            lines.append(f"{self._label(label, parse_html)} {self._text(str(value), parse_html)}")
        if not lines:
            return ""
        return "\n".join([self._heading(header, parse_html), "─" * 12, *lines]) + "\n"

    def _links(self, links: tuple[tuple[str, str], ...], parse_html: bool) -> str:
        if parse_html:
            return "\n".join(
                f'🔗 <a href="{html.escape(url, quote=True)}">{html.escape(label)}</a>'
                for label, url in links
            )
        return "\n".join(f"🔗 {label}: {url}" for label, url in links)

    @staticmethod
    def _text(value: str, parse_html: bool) -> str:
        return html.escape(value) if parse_html else value

    @staticmethod
    def _bold(text: str, parse_html: bool) -> str:
        return f"<b>{html.escape(text)}</b>" if parse_html else text

    def _heading(self, text: str, parse_html: bool) -> str:
        emoji, _, remainder = text.partition(" ")
        if remainder:
            return f"{emoji} {self._bold(remainder, parse_html)}"
        return self._bold(text, parse_html)

    def _label(self, label: str, parse_html: bool) -> str:
        emoji, _, remainder = label.partition(" ")
        if remainder:
            return f"{emoji} {self._bold(remainder + ':', parse_html)}"
        return self._bold(label + ":", parse_html)

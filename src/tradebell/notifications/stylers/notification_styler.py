# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji separators (Telegram HTML)."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from html import escape
from typing import Any, cast

from telegram.constants import MessageLimit

from tradebell.notifications.types import NotificationMessage, NotificationStyler

MAX_MESSAGE_LENGTH = int(MessageLimit.MAX_TEXT_LENGTH)


def _telegram_length(text: str) -> int:
    """Length as Telegram counts it (UTF-16 code units)."""
    return len(text.encode("utf-16-le")) // 2


class EventNotificationStyler(NotificationStyler):
    """Render notifications by event_type with emojis, separators and formatted sections."""

    def render(self, message: NotificationMessage) -> str:
        """Dispatch to the appropriate renderer based on event_type."""
        if message.event_type == "trade_completed":
            return self._render_trade(message)
        if message.event_type == "system_started":
            return self._render_system_started(message)
        if message.event_type == "system_stopped":
            return self._render_status(message, "🛑 Status")
        if message.event_type == "account_disabled":
            return self._render_account_disabled(message)
        return self._render_generic(message)

    def _render_trade(self, message: NotificationMessage) -> str:
        """Render a completed trade: header, summary, received and given items.

        Item lists are shortened with an "… and N more" line until the text
        fits into one Telegram message.
        """
        payload: dict[str, Any] = message.payload.copy() if message.payload else {}
        trade_raw = payload.get("trade")
        trade = cast(dict[str, Any], trade_raw) if isinstance(trade_raw, dict) else {}
        emoji, title = self._title(message.event_type)

        account = payload.get("account") or "N/A"
        direction = "Sent by us" if trade.get("is_our_offer") else "Received offer"
        header = [
            f"{emoji} <b>{title}</b>",
            f"<b>Account: {escape(str(account))}</b>\n",
            self._section(
                "📊 Trade Summary",
                [
                    ("🆔 Trade ID", trade.get("trade_id") or "N/A"),
                    ("👤 Partner", trade.get("partner_account_id") or ""),
                    ("🔁 Offer", direction),
                    ("🕒 Completed", self._format_timestamp(trade.get("time_updated"))),
                    ("💬 Message", trade.get("message") or ""),
                    ("❔ Undescribed items", payload.get("unresolved_count") or ""),
                ],
            ),
        ]
        received = self.combine_items(self._names(payload.get("items_received")))
        given = self.combine_items(self._names(payload.get("items_given")))

        shown = max(len(received), len(given))
        while True:
            lines = header + [
                self._items_section("📥 Received", received, shown),
                self._items_section("📤 Given", given, shown),
            ]
            text = "\n".join([line for line in lines if line]).strip()
            if shown == 0 or _telegram_length(text) <= MAX_MESSAGE_LENGTH:
                return text
            shown //= 2

    @staticmethod
    def _names(raw: Any) -> list[Any]:
        return cast(list[Any], raw) if isinstance(raw, list) else []

    def _items_section(self, header: str, lines: list[str], shown: int) -> str:
        if not lines:
            return ""
        rows = lines[:shown]
        hidden = len(lines) - len(rows)
        if hidden:
            rows.append(f"… and {hidden} more")
        return self._section(header, [("", line) for line in rows])

    @staticmethod
    def combine_items(names: list[Any]) -> list[str]:
        """Bullet lines with identical names combined as 'name ×N', first-seen order."""
        counts = Counter(str(n) for n in names)
        lines: list[str] = []
        for name, count in counts.items():
            suffix = f" ×{count}" if count > 1 else ""
            lines.append(f"• {escape(name)}{suffix}")
        return lines

    def _render_system_started(self, message: NotificationMessage) -> str:
        emoji, title = self._title(message.event_type)
        payload = message.payload or {}
        raw_accounts = payload.get("accounts")
        names: list[str] = []
        if isinstance(raw_accounts, list):
            names = [escape(str(a)) for a in cast(list[Any], raw_accounts)]
        lines = [
            f"{emoji} <b>{title}</b>\n",
            self._section("🚀 Status", [("", escape(message.message))]),
        ]
        if names:
            lines.append(self._section("👛 Accounts", [("", ", ".join(names))]))
        return "\n".join([line for line in lines if line]).strip()

    def _render_status(self, message: NotificationMessage, header: str) -> str:
        emoji, title = self._title(message.event_type)
        lines = [f"{emoji} <b>{title}</b>\n", self._section(header, [("", escape(message.message))])]
        return "\n".join([line for line in lines if line]).strip()

    def _render_account_disabled(self, message: NotificationMessage) -> str:
        emoji, title = self._title(message.event_type)
        payload = message.payload or {}
        lines = [
            f"{emoji} <b>{title}</b>\n",
            self._section(
                "🔒 Polling stopped",
                [
                    ("👛 Account", payload.get("account") or "N/A"),
                    ("❗ Reason", payload.get("reason") or message.message),
                ],
            ),
        ]
        return "\n".join([line for line in lines if line]).strip()

    def _render_generic(self, message: NotificationMessage) -> str:
        """Render unknown event types using message and payload."""
        emoji, title = self._title(message.event_type)
        lines = [f"{emoji} <b>{title}</b>", escape(message.message)]
        if message.payload:
            for key in sorted(message.payload.keys()):
                value = message.payload.get(key)
                if value is not None:
                    lines.append(f"<b>{escape(key)}:</b> {escape(str(value))}")
        return "\n".join(lines).strip()

    @staticmethod
    def _title(event_type: str) -> tuple[str, str]:
        """Get the emoji and title for the given event type."""
        mapping = {
            "trade_completed": ("🤝", "Trade Completed"),
            "account_disabled": ("⚠️", "Account Disabled"),
            "system_started": ("▶️", "System Started"),
            "system_stopped": ("⏹️", "System Stopped"),
        }
        return mapping.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))

    def _section(self, header: str, rows: list[tuple[str, Any]]) -> str:
        """Format a section with a header and rows."""
        lines: list[str] = []
        content_lines: list[str] = []
        for label, value in rows:
            if not value:
                continue
            if label:
                content_lines.append(f"{self._format_label(label)} {escape(str(value))}")
            else:
                content_lines.append(str(value))
        if not content_lines:
            return ""
        lines.append(f"{self._format_heading(header)}\n{'─'*12}")
        lines.extend(content_lines)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _format_timestamp(value: Any) -> str:
        """Format epoch seconds into ISO-8601 UTC when possible."""
        if value is None:
            return "N/A"
        try:
            ts = float(value)
        except (TypeError, ValueError):
            return str(value)
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
        except (OSError, OverflowError, ValueError):
            return str(value)

    @staticmethod
    def _format_heading(text: str) -> str:
        """Format a section heading with bold text."""
        if not text:
            return ""
        emoji, _, remainder = text.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}</b>"
        return f"<b>{text}</b>"

    @staticmethod
    def _format_label(label: str) -> str:
        """Format row labels with bold text."""
        if not label:
            return ""
        emoji, _, remainder = label.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}:</b>"
        return f"<b>{label}:</b>"

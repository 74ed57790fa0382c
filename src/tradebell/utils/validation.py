"""Helpers for keeping secrets out of logs."""

from __future__ import annotations


def mask_secret(value: str | None) -> str:
    """Return a masked secret for logging (e.g. ABCD...WXYZ)."""
    if not value or len(value) < 12:
        return "***"
    return f"{value[:4]}...{value[-4:]}"

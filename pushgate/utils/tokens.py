"""Helpers to keep device tokens out of the logs."""

from __future__ import annotations

_VISIBLE_PREFIX = 8


def mask_token(token: str | None) -> str:
    """Return a log-safe representation of a provider device token."""

    if not token:
        return "<empty>"
    if len(token) <= _VISIBLE_PREFIX:
        return "***"
    return f"{token[:_VISIBLE_PREFIX]}..."


__all__ = ["mask_token"]

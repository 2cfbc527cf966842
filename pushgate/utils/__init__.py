"""Utility helpers for reusable functionality."""

from .datetime import (
    from_storage_datetime,
    get_app_timezone,
    now_in_app_timezone,
    to_storage_datetime,
)
from .tokens import mask_token

__all__ = [
    "from_storage_datetime",
    "get_app_timezone",
    "mask_token",
    "now_in_app_timezone",
    "to_storage_datetime",
]

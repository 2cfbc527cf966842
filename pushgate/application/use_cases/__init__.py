"""Aggregate application use cases."""

from .push_notifications import send_push_notification

__all__ = ["send_push_notification"]

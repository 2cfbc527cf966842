"""Use cases for delivering push notifications."""

from .audience import AUDIENCE_SEGMENTS, AudienceResolver
from .dispatch import DispatchCoordinator, send_push_notification

__all__ = [
    "AUDIENCE_SEGMENTS",
    "AudienceResolver",
    "DispatchCoordinator",
    "send_push_notification",
]

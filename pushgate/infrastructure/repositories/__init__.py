"""Repository implementations for infrastructure layer."""

from .push_notification_repository import PushNotificationRepository
from .user_device_repository import UserDeviceRepository
from .user_repository import UserRepository

__all__ = [
    "PushNotificationRepository",
    "UserDeviceRepository",
    "UserRepository",
]

"""ORM models used by the application infrastructure."""

from .push_notification import PushNotificationModel
from .user import UserModel
from .user_device import UserDeviceModel

__all__ = [
    "PushNotificationModel",
    "UserDeviceModel",
    "UserModel",
]

from .push_notification import (
    DispatchErrorResponse,
    SendPushNotificationRequest,
    SendPushNotificationResponse,
)

__all__ = [
    "DispatchErrorResponse",
    "SendPushNotificationRequest",
    "SendPushNotificationResponse",
]

"""Domain entities exposed by the application."""

from .credential import AccessCredential, ServiceAccountIdentity
from .delivery import (
    CHANNEL_LEGACY,
    CHANNEL_STRUCTURED,
    DeliveryClassification,
    DeliveryOutcome,
    DispatchResult,
)
from .device_endpoint import DeviceEndpoint
from .push_notification import (
    AUDIENCE_ALL,
    AUDIENCE_FREE,
    AUDIENCE_PAID,
    AUDIENCE_FREE_TIER,
    AUDIENCE_PAID_TIER,
    AUDIENCE_PARTNERS,
    AUDIENCE_USERS,
    DEFAULT_ACTION_TYPE,
    NOTIFICATION_STATUS_DRAFT,
    NOTIFICATION_STATUS_SENDING,
    NOTIFICATION_STATUS_SENT,
    PushNotification,
    is_status_regression,
)

__all__ = [
    "AccessCredential",
    "ServiceAccountIdentity",
    "CHANNEL_LEGACY",
    "CHANNEL_STRUCTURED",
    "DeliveryClassification",
    "DeliveryOutcome",
    "DispatchResult",
    "DeviceEndpoint",
    "PushNotification",
    "AUDIENCE_ALL",
    "AUDIENCE_FREE",
    "AUDIENCE_PAID",
    "AUDIENCE_FREE_TIER",
    "AUDIENCE_PAID_TIER",
    "AUDIENCE_PARTNERS",
    "AUDIENCE_USERS",
    "DEFAULT_ACTION_TYPE",
    "NOTIFICATION_STATUS_DRAFT",
    "NOTIFICATION_STATUS_SENDING",
    "NOTIFICATION_STATUS_SENT",
    "is_status_regression",
]

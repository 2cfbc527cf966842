"""Domain entity representing a push notification campaign."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

NOTIFICATION_STATUS_DRAFT = "draft"
NOTIFICATION_STATUS_SENDING = "sending"
NOTIFICATION_STATUS_SENT = "sent"

# Position of each status in its lifecycle; a record never moves backwards.
_STATUS_ORDER = {
    NOTIFICATION_STATUS_DRAFT: 0,
    NOTIFICATION_STATUS_SENDING: 1,
    NOTIFICATION_STATUS_SENT: 2,
}

AUDIENCE_ALL = "all"
AUDIENCE_USERS = "users"
AUDIENCE_PARTNERS = "partners"
AUDIENCE_FREE = "free"
AUDIENCE_PAID = "paid"
AUDIENCE_FREE_TIER = "free-tier"
AUDIENCE_PAID_TIER = "paid-tier"

DEFAULT_ACTION_TYPE = "open_app"


def is_status_regression(current: str | None, new: str) -> bool:
    """Return ``True`` when moving from ``current`` to ``new`` goes backwards."""

    if current is None:
        return False
    return _STATUS_ORDER.get(new, 0) < _STATUS_ORDER.get(current, 0)


@dataclass
class PushNotification:
    """Message broadcast to a set of devices selected by its targeting fields."""

    id: str
    title: str
    body: str
    image_url: str | None = None
    action_type: str | None = None
    action_data: str | None = None
    target_user_ids: list[str] = field(default_factory=list)
    target_audience: str = AUDIENCE_ALL
    status: str = NOTIFICATION_STATUS_DRAFT
    sent_count: int = 0
    failed_count: int = 0
    sent_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_sent(self) -> bool:
        return self.status == NOTIFICATION_STATUS_SENT

    def data_payload(self) -> dict[str, str]:
        """Return the opaque payload forwarded to the client application."""

        return {
            "action_type": str(self.action_type or DEFAULT_ACTION_TYPE),
            "action_data": str(self.action_data or ""),
            "notification_id": str(self.id),
        }


__all__ = [
    "PushNotification",
    "NOTIFICATION_STATUS_DRAFT",
    "NOTIFICATION_STATUS_SENDING",
    "NOTIFICATION_STATUS_SENT",
    "AUDIENCE_ALL",
    "AUDIENCE_USERS",
    "AUDIENCE_PARTNERS",
    "AUDIENCE_FREE",
    "AUDIENCE_PAID",
    "AUDIENCE_FREE_TIER",
    "AUDIENCE_PAID_TIER",
    "DEFAULT_ACTION_TYPE",
    "is_status_regression",
]

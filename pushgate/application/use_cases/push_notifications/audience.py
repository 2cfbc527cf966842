"""Resolve the devices targeted by a push notification."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from pushgate.domain.entities import (
    AUDIENCE_ALL,
    AUDIENCE_FREE,
    AUDIENCE_FREE_TIER,
    AUDIENCE_PAID,
    AUDIENCE_PAID_TIER,
    AUDIENCE_PARTNERS,
    AUDIENCE_USERS,
    DeviceEndpoint,
    PushNotification,
)

logger = logging.getLogger(__name__)

_FREE_PLANS = ("free",)
_PAID_PLANS = ("basic", "plus", "pro", "starter", "business")

# Audience -> (user attribute, accepted values)
# `free` and `paid` are aliases of the tier names.
AUDIENCE_SEGMENTS: dict[str, tuple[str, tuple[str, ...]]] = {
    AUDIENCE_USERS: ("role", ("user",)),
    AUDIENCE_PARTNERS: ("role", ("partner", "professional")),
    AUDIENCE_FREE_TIER: ("subscription_plan", _FREE_PLANS),
    AUDIENCE_PAID_TIER: ("subscription_plan", _PAID_PLANS),
    AUDIENCE_FREE: ("subscription_plan", _FREE_PLANS),
    AUDIENCE_PAID: ("subscription_plan", _PAID_PLANS),
}


class DeviceStore(Protocol):
    def list_active(self, user_ids: Iterable[str] | None = None) -> Sequence[DeviceEndpoint]: ...

    def deactivate(self, device_ids: Iterable[str]) -> int: ...


class UserStore(Protocol):
    def list_ids_matching(self, attribute: str, values: Iterable[str]) -> Sequence[str]: ...


class AudienceResolver:
    """Turn targeting fields into the ordered list of active endpoints.

    Lookup failures are logged and resolve to no devices at all.
    """

    def __init__(self, devices: DeviceStore, users: UserStore) -> None:
        self._devices = devices
        self._users = users

    def resolve(self, notification: PushNotification) -> list[DeviceEndpoint]:
        try:
            return list(self._resolve(notification))
        except SQLAlchemyError:
            logger.exception("Device lookup failed for notification %s", notification.id)
            return []

    def _resolve(self, notification: PushNotification) -> Sequence[DeviceEndpoint]:
        target_user_ids = [str(user_id) for user_id in notification.target_user_ids or [] if user_id]
        if target_user_ids:
            return self._devices.list_active(target_user_ids)

        audience = (notification.target_audience or AUDIENCE_ALL).strip().lower()
        if audience == AUDIENCE_ALL:
            return self._devices.list_active()

        segment = AUDIENCE_SEGMENTS.get(audience)
        if segment is None:
            logger.warning(
                "Unknown audience '%s' on notification %s; no devices selected",
                notification.target_audience,
                notification.id,
            )
            return []

        attribute, values = segment
        user_ids = self._users.list_ids_matching(attribute, values)
        if not user_ids:
            logger.info("Audience '%s' matched no users", audience)
            return []
        return self._devices.list_active(user_ids)


__all__ = ["AUDIENCE_SEGMENTS", "AudienceResolver", "DeviceStore", "UserStore"]

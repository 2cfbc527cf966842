"""Request bodies for both delivery channels."""

from __future__ import annotations

from typing import Any

from pushgate.domain.entities import DeviceEndpoint, PushNotification

DEFAULT_SOUND = "default"
ANDROID_PRIORITY = "high"


def _notification_block(notification: PushNotification) -> dict[str, str]:
    block = {"title": notification.title, "body": notification.body}
    if notification.image_url:
        block["image"] = notification.image_url
    return block


def build_structured_message(
    endpoint: DeviceEndpoint,
    notification: PushNotification,
    *,
    click_action: str,
    channel_id: str,
) -> dict[str, Any]:
    """Return the ``messages:send`` body addressed to ``endpoint``."""

    return {
        "message": {
            "token": endpoint.device_token,
            "notification": _notification_block(notification),
            "data": notification.data_payload(),
            "android": {
                "priority": ANDROID_PRIORITY,
                "notification": {
                    "sound": DEFAULT_SOUND,
                    "click_action": click_action,
                    "channel_id": channel_id,
                },
            },
            "apns": {
                "payload": {
                    "aps": {
                        "sound": DEFAULT_SOUND,
                        "content-available": 1,
                    }
                }
            },
        }
    }


def build_legacy_payload(
    endpoint: DeviceEndpoint,
    notification: PushNotification,
    *,
    click_action: str,
) -> dict[str, Any]:
    """Return the legacy send body addressed to ``endpoint``."""

    notification_block: dict[str, str] = _notification_block(notification)
    notification_block["sound"] = DEFAULT_SOUND
    return {
        "to": endpoint.device_token,
        "notification": notification_block,
        "data": {**notification.data_payload(), "click_action": click_action},
        "android": {"priority": ANDROID_PRIORITY},
    }


__all__ = ["build_legacy_payload", "build_structured_message"]

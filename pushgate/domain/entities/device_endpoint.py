"""Domain entity representing a registered device."""

from dataclasses import dataclass


@dataclass
class DeviceEndpoint:
    """A single device's delivery address for push messages."""

    id: str
    device_token: str
    user_id: str | None
    platform: str | None = None
    is_active: bool = True


__all__ = ["DeviceEndpoint"]

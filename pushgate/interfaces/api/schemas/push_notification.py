"""Pydantic models describing push dispatch payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SendPushNotificationRequest(BaseModel):
    """Payload identifying the notification to deliver."""

    notification_id: str | None = Field(
        default=None, description="Identificador de la notificación a enviar"
    )


class SendPushNotificationResponse(BaseModel):
    """Delivery tally returned after a dispatch."""

    success: Literal[True] = True
    sent: int
    failed: int
    total_devices: int
    invalid_tokens_removed: int
    api_used: Literal["structured", "legacy"] | None = None
    warnings: list[str] = Field(default_factory=list)
    message: str | None = None
    already_sent: bool | None = None


class DispatchErrorResponse(BaseModel):
    """Body returned when a dispatch cannot run at all."""

    success: Literal[False] = False
    error: str


__all__ = [
    "DispatchErrorResponse",
    "SendPushNotificationRequest",
    "SendPushNotificationResponse",
]

"""Value objects produced while delivering a push notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

CHANNEL_STRUCTURED = "structured"
CHANNEL_LEGACY = "legacy"


class DeliveryClassification(str, Enum):
    """Outcome of a single delivery attempt."""

    SENT = "sent"
    INVALID_TOKEN = "invalid_token"
    TRANSIENT_ERROR = "transient_error"
    CHANNEL_UNAVAILABLE = "channel_unavailable"


@dataclass(frozen=True)
class DeliveryOutcome:
    """Classified result of sending one message to one endpoint."""

    endpoint_id: str
    classification: DeliveryClassification
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.classification is DeliveryClassification.SENT

    @property
    def should_deactivate(self) -> bool:
        return self.classification is DeliveryClassification.INVALID_TOKEN


@dataclass
class DispatchResult:
    """Aggregate tally returned to callers of a dispatch."""

    sent: int = 0
    failed: int = 0
    total_devices: int = 0
    invalid_tokens_removed: int = 0
    api_used: str | None = None
    message: str | None = None
    already_sent: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": True,
            "sent": self.sent,
            "failed": self.failed,
            "total_devices": self.total_devices,
            "invalid_tokens_removed": self.invalid_tokens_removed,
            "api_used": self.api_used,
            "warnings": list(self.warnings),
        }
        if self.message:
            payload["message"] = self.message
        if self.already_sent:
            payload["already_sent"] = True
        return payload


__all__ = [
    "CHANNEL_LEGACY",
    "CHANNEL_STRUCTURED",
    "DeliveryClassification",
    "DeliveryOutcome",
    "DispatchResult",
]

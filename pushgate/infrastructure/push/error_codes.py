"""Provider error codes decoded from delivery responses."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pushgate.domain.entities import DeliveryClassification

_FCM_ERROR_TYPE = "type.googleapis.com/google.firebase.fcm.v1.FcmError"


class FcmErrorCode(str, Enum):
    """Error codes reported by the HTTP v1 ``messages:send`` endpoint."""

    UNSPECIFIED_ERROR = "UNSPECIFIED_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNREGISTERED = "UNREGISTERED"
    SENDER_ID_MISMATCH = "SENDER_ID_MISMATCH"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    UNAVAILABLE = "UNAVAILABLE"
    INTERNAL = "INTERNAL"
    THIRD_PARTY_AUTH_ERROR = "THIRD_PARTY_AUTH_ERROR"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def decode(cls, body: Any) -> "FcmErrorCode":
        """Extract the error code from an HTTP v1 error body.

        The first ``errorCode`` in ``error.details`` is authoritative, even when
        it is not a known code; ``error.status`` is only read when no detail
        carries one.
        """

        if not isinstance(body, dict):
            return cls.UNKNOWN
        error = body.get("error")
        if not isinstance(error, dict):
            return cls.UNKNOWN

        details = error.get("details")
        details = [d for d in details if isinstance(d, dict)] if isinstance(details, list) else []
        typed = [d for d in details if d.get("@type") == _FCM_ERROR_TYPE]
        coded = [d["errorCode"] for d in typed + details if d.get("errorCode")]
        raw = coded[0] if coded else error.get("status")
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(str(raw).upper())
        except ValueError:
            return cls.UNKNOWN


class LegacyErrorCode(str, Enum):
    """Per-result error strings reported by the legacy send endpoint."""

    NOT_REGISTERED = "NotRegistered"
    INVALID_REGISTRATION = "InvalidRegistration"
    MISSING_REGISTRATION = "MissingRegistration"
    MISMATCH_SENDER_ID = "MismatchSenderId"
    MESSAGE_TOO_BIG = "MessageTooBig"
    INVALID_DATA_KEY = "InvalidDataKey"
    DEVICE_MESSAGE_RATE_EXCEEDED = "DeviceMessageRateExceeded"
    UNAVAILABLE = "Unavailable"
    INTERNAL_SERVER_ERROR = "InternalServerError"
    UNKNOWN = "Unknown"

    @classmethod
    def decode(cls, body: Any) -> "LegacyErrorCode":
        """Extract the first per-device error from a legacy response body."""

        if not isinstance(body, dict):
            return cls.UNKNOWN
        results = body.get("results")
        if not isinstance(results, list) or not results:
            return cls.UNKNOWN
        first = results[0]
        if not isinstance(first, dict) or not first.get("error"):
            return cls.UNKNOWN
        try:
            return cls(str(first["error"]))
        except ValueError:
            return cls.UNKNOWN


_STRUCTURED_INVALID_TOKEN_CODES = frozenset(
    {FcmErrorCode.UNREGISTERED, FcmErrorCode.INVALID_ARGUMENT}
)
_LEGACY_INVALID_TOKEN_CODES = frozenset(
    {LegacyErrorCode.NOT_REGISTERED, LegacyErrorCode.INVALID_REGISTRATION}
)


def classify_structured_error(code: FcmErrorCode) -> DeliveryClassification:
    if code in _STRUCTURED_INVALID_TOKEN_CODES:
        return DeliveryClassification.INVALID_TOKEN
    return DeliveryClassification.TRANSIENT_ERROR


def classify_legacy_error(code: LegacyErrorCode) -> DeliveryClassification:
    if code in _LEGACY_INVALID_TOKEN_CODES:
        return DeliveryClassification.INVALID_TOKEN
    return DeliveryClassification.TRANSIENT_ERROR


__all__ = [
    "FcmErrorCode",
    "LegacyErrorCode",
    "classify_legacy_error",
    "classify_structured_error",
]

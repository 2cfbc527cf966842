"""Delivery channels for push notifications."""

from .config import PushChannelConfig
from .credentials import CredentialCache, CredentialMinter, credential_cache
from .error_codes import FcmErrorCode, LegacyErrorCode
from .senders import LegacySender, StructuredSender

__all__ = [
    "CredentialCache",
    "CredentialMinter",
    "FcmErrorCode",
    "LegacyErrorCode",
    "LegacySender",
    "PushChannelConfig",
    "StructuredSender",
    "credential_cache",
]

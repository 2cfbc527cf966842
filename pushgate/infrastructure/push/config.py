"""Explicit configuration handed to the push delivery components."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pushgate.config import (
    DEFAULT_FCM_BASE_URL,
    DEFAULT_FCM_LEGACY_URL,
    DEFAULT_OAUTH_TOKEN_URL,
    Settings,
)
from pushgate.domain.entities import ServiceAccountIdentity
from pushgate.domain.exceptions import PushConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PushChannelConfig:
    """Channel credentials and tuning knobs used by a dispatch.

    ``structured_identity`` enables the HTTP v1 channel, ``legacy_server_key``
    enables the deprecated fallback. Either may be ``None``.
    """

    structured_identity: ServiceAccountIdentity | None = None
    project_id: str | None = None
    legacy_server_key: str | None = None
    token_endpoint: str = DEFAULT_OAUTH_TOKEN_URL
    structured_base_url: str = DEFAULT_FCM_BASE_URL
    legacy_endpoint: str = DEFAULT_FCM_LEGACY_URL
    click_action: str = "FLUTTER_NOTIFICATION_CLICK"
    android_channel_id: str = "high_importance_channel"
    request_timeout: float = 10.0
    max_workers: int = 8
    cache_credentials: bool = True
    credential_refresh_margin: int = 60

    @property
    def structured_enabled(self) -> bool:
        return self.structured_identity is not None and bool(self.project_id)

    @property
    def legacy_enabled(self) -> bool:
        return bool(self.legacy_server_key)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PushChannelConfig":
        """Build the configuration from application settings.

        A malformed service account only disables the structured channel.
        """

        identity: ServiceAccountIdentity | None = None
        if settings.firebase_service_account:
            try:
                identity = ServiceAccountIdentity.from_json(settings.firebase_service_account)
            except PushConfigurationError as exc:
                logger.error("Structured push channel disabled: %s", exc)

        project_id = settings.firebase_project_id or (identity.project_id if identity else None)
        if identity is not None and not project_id:
            logger.error("Structured push channel disabled: no project id configured")

        return cls(
            structured_identity=identity,
            project_id=project_id,
            legacy_server_key=settings.fcm_server_key,
            token_endpoint=settings.oauth_token_url,
            structured_base_url=settings.fcm_base_url.rstrip("/"),
            legacy_endpoint=settings.fcm_legacy_url,
            click_action=settings.push_click_action,
            android_channel_id=settings.push_android_channel_id,
            request_timeout=settings.push_request_timeout_seconds,
            max_workers=settings.push_dispatch_max_workers,
            cache_credentials=settings.push_credential_cache_enabled,
            credential_refresh_margin=settings.credential_refresh_margin_seconds,
        )


__all__ = ["PushChannelConfig"]

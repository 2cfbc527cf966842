"""Per-device senders for the structured and legacy channels.

``send`` never raises: transport failures become ``TRANSIENT_ERROR`` outcomes so
one device cannot abort a batch.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from pushgate.domain.entities import (
    DeliveryClassification,
    DeliveryOutcome,
    DeviceEndpoint,
    PushNotification,
)
from pushgate.utils import mask_token

from .config import PushChannelConfig
from .error_codes import (
    FcmErrorCode,
    LegacyErrorCode,
    classify_legacy_error,
    classify_structured_error,
)
from .messages import build_legacy_payload, build_structured_message

logger = logging.getLogger(__name__)


def _json_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class StructuredSender:
    """Send messages through the HTTP v1 ``messages:send`` API."""

    def __init__(self, config: PushChannelConfig) -> None:
        self._config = config

    def endpoint_url(self, project_id: str) -> str:
        return f"{self._config.structured_base_url}/v1/projects/{project_id}/messages:send"

    def send(
        self,
        access_token: str,
        project_id: str,
        endpoint: DeviceEndpoint,
        notification: PushNotification,
    ) -> DeliveryOutcome:
        body = build_structured_message(
            endpoint,
            notification,
            click_action=self._config.click_action,
            channel_id=self._config.android_channel_id,
        )
        try:
            response = requests.post(
                self.endpoint_url(project_id),
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Content-Type": "application/json",
                },
                json=body,
                timeout=self._config.request_timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Structured send to device %s failed: %s", endpoint.id, exc)
            return DeliveryOutcome(endpoint.id, DeliveryClassification.TRANSIENT_ERROR, str(exc))

        payload = _json_body(response)
        if 200 <= response.status_code < 300:
            logger.debug("Sent to device %s (%s)", endpoint.id, mask_token(endpoint.device_token))
            return DeliveryOutcome(endpoint.id, DeliveryClassification.SENT)

        code = FcmErrorCode.decode(payload)
        classification = classify_structured_error(code)
        logger.warning(
            "Structured send to device %s (%s) failed with status %s: %s",
            endpoint.id,
            mask_token(endpoint.device_token),
            response.status_code,
            code.value,
        )
        return DeliveryOutcome(endpoint.id, classification, code.value)


class LegacySender:
    """Send messages through the deprecated server-key API."""

    def __init__(self, config: PushChannelConfig) -> None:
        self._config = config

    def send(
        self,
        server_key: str,
        endpoint: DeviceEndpoint,
        notification: PushNotification,
    ) -> DeliveryOutcome:
        body = build_legacy_payload(endpoint, notification, click_action=self._config.click_action)
        try:
            response = requests.post(
                self._config.legacy_endpoint,
                headers={
                    "Authorization": f"key={server_key}",
                    "Content-Type": "application/json",
                },
                json=body,
                timeout=self._config.request_timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Legacy send to device %s failed: %s", endpoint.id, exc)
            return DeliveryOutcome(endpoint.id, DeliveryClassification.TRANSIENT_ERROR, str(exc))

        payload = _json_body(response)
        if isinstance(payload, dict) and payload.get("success") == 1:
            logger.debug("Sent to device %s (%s) via legacy API", endpoint.id, mask_token(endpoint.device_token))
            return DeliveryOutcome(endpoint.id, DeliveryClassification.SENT)

        code = LegacyErrorCode.decode(payload)
        logger.warning(
            "Legacy send to device %s (%s) failed with status %s: %s",
            endpoint.id,
            mask_token(endpoint.device_token),
            response.status_code,
            code.value,
        )
        return DeliveryOutcome(endpoint.id, classify_legacy_error(code), code.value)


__all__ = ["LegacySender", "StructuredSender"]

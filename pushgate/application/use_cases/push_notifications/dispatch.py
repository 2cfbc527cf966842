"""Deliver a push notification to every device in its audience."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pushgate.domain.entities import (
    CHANNEL_LEGACY,
    CHANNEL_STRUCTURED,
    NOTIFICATION_STATUS_SENDING,
    NOTIFICATION_STATUS_SENT,
    DeliveryClassification,
    DeliveryOutcome,
    DeviceEndpoint,
    DispatchResult,
    PushNotification,
)
from pushgate.domain.exceptions import (
    CredentialSigningError,
    NotificationNotFoundError,
    NotificationStatusConflictError,
    PushConfigurationError,
    TokenExchangeError,
)
from pushgate.infrastructure.push import (
    CredentialMinter,
    LegacySender,
    PushChannelConfig,
    StructuredSender,
)
from pushgate.infrastructure.repositories import (
    PushNotificationRepository,
    UserDeviceRepository,
    UserRepository,
)
from pushgate.utils import now_in_app_timezone

from .audience import AudienceResolver, DeviceStore, UserStore

logger = logging.getLogger(__name__)

NO_DEVICES_MESSAGE = "No devices to send to"
ALREADY_SENT_MESSAGE = "Notification already sent"
NO_CHANNEL_ERROR = "no_channel_configured"


class NotificationStore(Protocol):
    def get(self, notification_id: str) -> PushNotification | None: ...

    def update_status(
        self,
        notification_id: str,
        status: str,
        *,
        sent_at: datetime | None = None,
        sent_count: int | None = None,
        failed_count: int | None = None,
    ) -> PushNotification: ...


SendFn = Callable[[DeviceEndpoint], DeliveryOutcome]


class DispatchCoordinator:
    """Run one dispatch: resolve, mint, send, clean up and record the tally."""

    def __init__(
        self,
        *,
        notifications: NotificationStore,
        devices: DeviceStore,
        users: UserStore,
        config: PushChannelConfig,
        minter: CredentialMinter | None = None,
        structured_sender: StructuredSender | None = None,
        legacy_sender: LegacySender | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._notifications = notifications
        self._devices = devices
        self._resolver = AudienceResolver(devices, users)
        self._config = config
        self._minter = minter or CredentialMinter(config)
        self._structured = structured_sender or StructuredSender(config)
        self._legacy = legacy_sender or LegacySender(config)
        self._clock = clock

    def dispatch(self, notification_id: str) -> DispatchResult:
        """Deliver ``notification_id``.

        Raises :class:`NotificationNotFoundError` before any write when the
        notification does not exist. Per-device failures only affect counts.
        """

        notification = self._notifications.get(notification_id)
        if notification is None:
            raise NotificationNotFoundError("Notification not found")

        if notification.is_sent:
            logger.info("Notification %s was already sent; skipping dispatch", notification_id)
            return self._already_sent(notification)

        try:
            self._notifications.update_status(notification_id, NOTIFICATION_STATUS_SENDING)
        except NotificationStatusConflictError as exc:
            # Another invocation finished the notification after it was loaded.
            logger.info("Notification %s was sent concurrently: %s", notification_id, exc)
            return self._already_sent(self._notifications.get(notification_id) or notification)

        endpoints = self._resolver.resolve(notification)
        if not endpoints:
            result = DispatchResult(message=NO_DEVICES_MESSAGE)
            self._finalize(notification_id, result, invalid_ids=[])
            return result

        logger.info("Sending notification %s to %s devices", notification_id, len(endpoints))
        outcomes, channel = self._deliver(notification, endpoints)

        result = DispatchResult(total_devices=len(endpoints), api_used=channel)
        invalid_ids: dict[str, None] = {}
        for outcome in outcomes:
            if outcome.delivered:
                result.sent += 1
            else:
                result.failed += 1
                if outcome.should_deactivate:
                    invalid_ids[outcome.endpoint_id] = None

        self._finalize(notification_id, result, invalid_ids=list(invalid_ids))
        logger.info(
            "Notification %s results: %s sent, %s failed",
            notification_id,
            result.sent,
            result.failed,
        )
        return result

    @staticmethod
    def _already_sent(notification: PushNotification) -> DispatchResult:
        return DispatchResult(
            sent=notification.sent_count,
            failed=notification.failed_count,
            total_devices=notification.sent_count + notification.failed_count,
            message=ALREADY_SENT_MESSAGE,
            already_sent=True,
        )

    def _deliver(
        self,
        notification: PushNotification,
        endpoints: Sequence[DeviceEndpoint],
    ) -> tuple[list[DeliveryOutcome], str | None]:
        config = self._config
        if config.structured_enabled:
            token = self._mint_token()
            if token is not None:
                project_id = config.project_id or ""
                return (
                    self._fan_out(
                        endpoints,
                        lambda endpoint: self._structured.send(token, project_id, endpoint, notification),
                    ),
                    CHANNEL_STRUCTURED,
                )
            if config.legacy_enabled:
                logger.warning("Falling back to legacy push API for notification %s", notification.id)

        if config.legacy_enabled:
            server_key = config.legacy_server_key or ""
            return (
                self._fan_out(
                    endpoints,
                    lambda endpoint: self._legacy.send(server_key, endpoint, notification),
                ),
                CHANNEL_LEGACY,
            )

        logger.error("No push channel available for notification %s", notification.id)
        return (
            [
                DeliveryOutcome(endpoint.id, DeliveryClassification.CHANNEL_UNAVAILABLE, NO_CHANNEL_ERROR)
                for endpoint in endpoints
            ],
            None,
        )

    def _mint_token(self) -> str | None:
        try:
            credential = self._minter.mint(self._config.structured_identity)
        except (PushConfigurationError, CredentialSigningError, TokenExchangeError) as exc:
            logger.error("Structured push API unavailable: %s", exc)
            return None
        return credential.token

    def _fan_out(self, endpoints: Sequence[DeviceEndpoint], send: SendFn) -> list[DeliveryOutcome]:
        """Send to every endpoint, keeping outcomes in resolution order."""

        def guarded(endpoint: DeviceEndpoint) -> DeliveryOutcome:
            try:
                return send(endpoint)
            except Exception as exc:  # a single device must not abort the batch
                logger.exception("Unexpected error sending to device %s", endpoint.id)
                return DeliveryOutcome(endpoint.id, DeliveryClassification.TRANSIENT_ERROR, str(exc))

        workers = min(self._config.max_workers, len(endpoints))
        if workers <= 1:
            return [guarded(endpoint) for endpoint in endpoints]
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="push-send") as executor:
            return list(executor.map(guarded, endpoints))

    def _finalize(self, notification_id: str, result: DispatchResult, *, invalid_ids: list[str]) -> None:
        if invalid_ids:
            logger.info("Removing %s invalid device tokens", len(invalid_ids))
            try:
                self._devices.deactivate(invalid_ids)
            except SQLAlchemyError as exc:
                logger.warning("Could not deactivate invalid devices: %s", exc)
                result.warnings.append("invalid devices could not be deactivated")
            else:
                result.invalid_tokens_removed = len(invalid_ids)

        try:
            self._notifications.update_status(
                notification_id,
                NOTIFICATION_STATUS_SENT,
                sent_at=self._clock(),
                sent_count=result.sent,
                failed_count=result.failed,
            )
        except SQLAlchemyError as exc:
            logger.warning("Could not record results for notification %s: %s", notification_id, exc)
            result.warnings.append("delivery results could not be recorded")


def send_push_notification(
    session: Session,
    notification_id: str,
    *,
    config: PushChannelConfig,
) -> DispatchResult:
    """Dispatch ``notification_id`` using repositories bound to ``session``."""

    coordinator = DispatchCoordinator(
        notifications=PushNotificationRepository(session),
        devices=UserDeviceRepository(session),
        users=UserRepository(session),
        config=config,
    )
    return coordinator.dispatch(notification_id)


__all__ = [
    "ALREADY_SENT_MESSAGE",
    "DispatchCoordinator",
    "NO_DEVICES_MESSAGE",
    "NotificationStore",
    "send_push_notification",
]

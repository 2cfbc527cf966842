"""Persistence helpers for push notification entities."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from pushgate.domain.entities import PushNotification, is_status_regression
from pushgate.domain.exceptions import NotificationNotFoundError, NotificationStatusConflictError
from pushgate.infrastructure.models import PushNotificationModel
from pushgate.utils import from_storage_datetime, to_storage_datetime

from ._session import rollback_on_error


class PushNotificationRepository:
    """Read notifications and record their delivery status."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> PushNotification | None:
        with rollback_on_error(self.session):
            model = self.session.get(PushNotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: PushNotification) -> PushNotification:
        model = PushNotificationModel(id=notification.id)
        self._apply_entity_to_model(model, notification)
        with rollback_on_error(self.session):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def update_status(
        self,
        notification_id: str,
        status: str,
        *,
        sent_at: datetime | None = None,
        sent_count: int | None = None,
        failed_count: int | None = None,
    ) -> PushNotification:
        """Persist a status transition and, optionally, the delivery tally.

        ``sent_at`` is only written the first time it is provided.
        """

        with rollback_on_error(self.session):
            model = self.session.get(PushNotificationModel, notification_id)
            if model is None:
                raise NotificationNotFoundError(f"Notification {notification_id} not found")
            if is_status_regression(model.status, status):
                msg = f"Notification {notification_id} cannot move from '{model.status}' to '{status}'"
                raise NotificationStatusConflictError(msg, current_status=model.status)

            model.status = status
            if sent_at is not None and model.sent_at is None:
                model.sent_at = to_storage_datetime(sent_at)
            if sent_count is not None:
                model.sent_count = sent_count
            if failed_count is not None:
                model.failed_count = failed_count
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: PushNotificationModel, notification: PushNotification) -> None:
        model.title = notification.title
        model.body = notification.body
        model.image_url = notification.image_url
        model.action_type = notification.action_type
        model.action_data = notification.action_data
        model.target_user_ids = list(notification.target_user_ids or [])
        model.target_audience = notification.target_audience
        model.status = notification.status
        model.sent_count = notification.sent_count
        model.failed_count = notification.failed_count
        model.sent_at = to_storage_datetime(notification.sent_at)

    @staticmethod
    def _to_entity(model: PushNotificationModel) -> PushNotification:
        return PushNotification(
            id=model.id,
            title=model.title,
            body=model.body,
            image_url=model.image_url,
            action_type=model.action_type,
            action_data=model.action_data,
            target_user_ids=[str(user_id) for user_id in (model.target_user_ids or [])],
            target_audience=model.target_audience or "all",
            status=model.status,
            sent_count=model.sent_count or 0,
            failed_count=model.failed_count or 0,
            sent_at=from_storage_datetime(model.sent_at),
            created_at=from_storage_datetime(model.created_at),
        )


__all__ = ["PushNotificationRepository"]

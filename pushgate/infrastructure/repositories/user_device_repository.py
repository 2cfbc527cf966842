"""Persistence helpers for registered devices."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from pushgate.domain.entities import DeviceEndpoint
from pushgate.infrastructure.models import UserDeviceModel

from ._session import rollback_on_error


class UserDeviceRepository:
    """Query active devices and deactivate dead registrations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active(self, user_ids: Iterable[str] | None = None) -> Sequence[DeviceEndpoint]:
        """Return active devices, optionally restricted to ``user_ids``.

        ``None`` means every active device; an empty collection means none.
        """

        query = self.session.query(UserDeviceModel).filter(UserDeviceModel.is_active.is_(True))
        if user_ids is not None:
            ids = list(dict.fromkeys(str(user_id) for user_id in user_ids))
            if not ids:
                return []
            query = query.filter(UserDeviceModel.user_id.in_(ids))
        query = query.order_by(UserDeviceModel.created_at, UserDeviceModel.id)
        with rollback_on_error(self.session):
            models = query.all()
        return [self._to_entity(model) for model in models]

    def create(self, device: DeviceEndpoint) -> DeviceEndpoint:
        model = UserDeviceModel(
            id=device.id,
            user_id=device.user_id,
            device_token=device.device_token,
            platform=device.platform,
            is_active=device.is_active,
        )
        with rollback_on_error(self.session):
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def deactivate(self, device_ids: Iterable[str]) -> int:
        """Mark every device in ``device_ids`` inactive in a single update."""

        ids = list(dict.fromkeys(device_id for device_id in device_ids if device_id))
        if not ids:
            return 0
        with rollback_on_error(self.session):
            updated = (
                self.session.query(UserDeviceModel)
                .filter(UserDeviceModel.id.in_(ids))
                .update({UserDeviceModel.is_active: False}, synchronize_session=False)
            )
            self.session.commit()
        return int(updated or 0)

    @staticmethod
    def _to_entity(model: UserDeviceModel) -> DeviceEndpoint:
        return DeviceEndpoint(
            id=model.id,
            device_token=model.device_token,
            user_id=model.user_id,
            platform=model.platform,
            is_active=bool(model.is_active),
        )


__all__ = ["UserDeviceRepository"]

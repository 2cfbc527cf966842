"""SQLAlchemy model for registered push devices."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, func
from sqlalchemy.sql import expression

from pushgate.infrastructure.database import Base


class UserDeviceModel(Base):
    """Database representation of a device able to receive push messages."""

    __tablename__ = "user_devices"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    device_token = Column(String(512), nullable=False)
    platform = Column(String(20), nullable=True)
    is_active = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default=expression.true(),
        index=True,
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


__all__ = ["UserDeviceModel"]

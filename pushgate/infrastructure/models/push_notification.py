"""SQLAlchemy model for push notification campaigns."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text, func

from pushgate.infrastructure.database import Base


class PushNotificationModel(Base):
    """Database representation of a push notification and its delivery tally."""

    __tablename__ = "push_notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    action_type = Column(String(50), nullable=True)
    action_data = Column(Text, nullable=True)
    target_user_ids = Column(JSON, nullable=True)
    target_audience = Column(String(20), nullable=False, default="all")
    status = Column(String(20), nullable=False, default="draft")
    sent_count = Column(Integer, nullable=False, default=0)
    failed_count = Column(Integer, nullable=False, default=0)
    sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["PushNotificationModel"]

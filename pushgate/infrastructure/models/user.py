"""SQLAlchemy model for the user table."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, String, func

from pushgate.infrastructure.database import Base


class UserModel(Base):
    """Application user; only the columns used for audience segments are mapped."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(120), nullable=True, index=True)
    role = Column(String(30), nullable=False, default="user", index=True)
    subscription_plan = Column(String(30), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]

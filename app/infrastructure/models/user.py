"""SQLAlchemy models for notification subscribers."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a subscriber."""

    __tablename__ = "subscriber"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(80), nullable=False)
    last_name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    phone_number = Column(String(32), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    email_enabled = Column(Boolean, nullable=False, default=True)
    sms_enabled = Column(Boolean, nullable=False, default=False)
    push_enabled = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    preferences = relationship(
        "UserPreferenceModel",
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UserPreferenceModel(Base):
    """One free-text preference tag attached to a subscriber."""

    __tablename__ = "subscriber_preference"
    __table_args__ = (UniqueConstraint("user_id", "preference"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Integer, ForeignKey("subscriber.id", ondelete="CASCADE"), nullable=False, index=True
    )
    preference = Column(String(120), nullable=False, index=True)


__all__ = ["UserModel", "UserPreferenceModel"]

"""SQLAlchemy model for the append-only notification attempt log."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text

from app.domain.entities import NotificationChannel, NotificationStatus
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationAttemptModel(Base):
    """Database representation of one channel delivery attempt."""

    __tablename__ = "notification_attempt"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("subscriber.id", ondelete="CASCADE"), nullable=False, index=True
    )
    release_id = Column(
        Integer, ForeignKey("watch_release.id", ondelete="CASCADE"), nullable=False, index=True
    )
    channel = Column(
        Enum(NotificationChannel, name="notification_channel", native_enum=False),
        nullable=False,
    )
    status = Column(
        Enum(NotificationStatus, name="notification_status", native_enum=False),
        nullable=False,
        index=True,
    )
    subject = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
    recipient = Column(String(255), nullable=True)
    sent_at = Column(DateTime(), nullable=True)
    error_message = Column(Text, nullable=True)
    retry_count = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )


__all__ = ["NotificationAttemptModel"]

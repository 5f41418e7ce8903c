"""Domain entity representing a single notification attempt."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationChannel(str, Enum):
    EMAIL = "EMAIL"
    SMS = "SMS"
    PUSH = "PUSH"


class NotificationStatus(str, Enum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass
class NotificationAttempt:
    """Recorded outcome of delivering one channel message to one user.

    Rows are append-only: every dispatch pass writes new attempts instead of
    updating earlier ones.
    """

    id: int | None
    user_id: int
    release_id: int
    channel: NotificationChannel
    status: NotificationStatus
    subject: str | None = None
    message: str | None = None
    recipient: str | None = None
    sent_at: datetime | None = None
    error_message: str | None = None
    retry_count: int = 0
    created_at: datetime | None = None

    @classmethod
    def sent(
        cls,
        *,
        user_id: int,
        release_id: int,
        channel: NotificationChannel,
        subject: str | None,
        message: str,
        recipient: str,
        at: datetime,
    ) -> "NotificationAttempt":
        return cls(
            id=None,
            user_id=user_id,
            release_id=release_id,
            channel=channel,
            status=NotificationStatus.SENT,
            subject=subject,
            message=message,
            recipient=recipient,
            sent_at=at,
            error_message=None,
            created_at=at,
        )

    @classmethod
    def failed(
        cls,
        *,
        user_id: int,
        release_id: int,
        channel: NotificationChannel,
        error_message: str,
        at: datetime,
        subject: str | None = None,
        message: str | None = None,
        recipient: str | None = None,
    ) -> "NotificationAttempt":
        return cls(
            id=None,
            user_id=user_id,
            release_id=release_id,
            channel=channel,
            status=NotificationStatus.FAILED,
            subject=subject,
            message=message,
            recipient=recipient,
            sent_at=None,
            error_message=error_message or "Unknown delivery error",
            created_at=at,
        )


__all__ = ["NotificationAttempt", "NotificationChannel", "NotificationStatus"]

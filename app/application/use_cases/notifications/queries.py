"""Read-only queries over the notification attempt log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import NotificationAttempt, NotificationStatus
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_app_timezone


def list_user_notifications(session: Session, user_id: int) -> Sequence[NotificationAttempt]:
    """Return every attempt recorded for ``user_id``, newest first."""

    return NotificationRepository(session).list_for_user(user_id)


def list_notifications_by_status(
    session: Session, status: NotificationStatus | str
) -> Sequence[NotificationAttempt]:
    try:
        resolved = NotificationStatus(status)
    except ValueError as exc:
        raise ValidationError(f"Unknown notification status: {status}") from exc
    return NotificationRepository(session).list_by_status(resolved)


def list_notifications_by_date_range(
    session: Session, start_date: datetime, end_date: datetime
) -> Sequence[NotificationAttempt]:
    """Return attempts created between ``start_date`` and ``end_date`` inclusive."""

    start_date = ensure_app_timezone(start_date)
    end_date = ensure_app_timezone(end_date)
    if start_date > end_date:
        raise ValidationError("start_date must not be after end_date")
    return NotificationRepository(session).list_created_between(start_date, end_date)


def count_sent_notifications_for_user(session: Session, user_id: int) -> int:
    return NotificationRepository(session).count_sent_for_user(user_id)


__all__ = [
    "count_sent_notifications_for_user",
    "list_notifications_by_date_range",
    "list_notifications_by_status",
    "list_user_notifications",
]

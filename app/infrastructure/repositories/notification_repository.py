"""Persistence helpers for the notification attempt log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import NotificationAttempt, NotificationStatus
from app.infrastructure.models import NotificationAttemptModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Append and query :class:`NotificationAttempt` rows.

    The log is append-only, so there is no update or delete.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, attempt: NotificationAttempt) -> NotificationAttempt:
        model = NotificationAttemptModel()
        self._apply_entity_to_model(model, attempt)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(self, user_id: int) -> Sequence[NotificationAttempt]:
        query = (
            self.session.query(NotificationAttemptModel)
            .filter(NotificationAttemptModel.user_id == user_id)
            .order_by(NotificationAttemptModel.created_at.desc(), NotificationAttemptModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_release(self, release_id: int) -> Sequence[NotificationAttempt]:
        query = (
            self.session.query(NotificationAttemptModel)
            .filter(NotificationAttemptModel.release_id == release_id)
            .order_by(NotificationAttemptModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_by_status(self, status: NotificationStatus) -> Sequence[NotificationAttempt]:
        query = (
            self.session.query(NotificationAttemptModel)
            .filter(NotificationAttemptModel.status == status)
            .order_by(NotificationAttemptModel.created_at.desc(), NotificationAttemptModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_created_between(
        self, start: datetime, end: datetime
    ) -> Sequence[NotificationAttempt]:
        """Return attempts created within ``[start, end]``."""

        query = (
            self.session.query(NotificationAttemptModel)
            .filter(NotificationAttemptModel.created_at >= ensure_app_naive_datetime(start))
            .filter(NotificationAttemptModel.created_at <= ensure_app_naive_datetime(end))
            .order_by(NotificationAttemptModel.created_at.asc(), NotificationAttemptModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count_sent_for_user(self, user_id: int) -> int:
        total = (
            self.session.query(func.count(NotificationAttemptModel.id))
            .filter(NotificationAttemptModel.user_id == user_id)
            .filter(NotificationAttemptModel.status == NotificationStatus.SENT)
            .scalar()
        )
        return int(total or 0)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationAttemptModel, attempt: NotificationAttempt
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            attempt.created_at or now_in_app_timezone()
        )
        model.user_id = attempt.user_id
        model.release_id = attempt.release_id
        model.channel = attempt.channel
        model.status = attempt.status
        model.subject = attempt.subject
        model.message = attempt.message
        model.recipient = attempt.recipient
        model.sent_at = ensure_app_naive_datetime(attempt.sent_at)
        model.error_message = attempt.error_message
        model.retry_count = attempt.retry_count or 0

    @staticmethod
    def _to_entity(model: NotificationAttemptModel) -> NotificationAttempt:
        return NotificationAttempt(
            id=model.id,
            user_id=model.user_id,
            release_id=model.release_id,
            channel=model.channel,
            status=model.status,
            subject=model.subject,
            message=model.message,
            recipient=model.recipient,
            sent_at=ensure_app_timezone(model.sent_at),
            error_message=model.error_message,
            retry_count=model.retry_count,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]

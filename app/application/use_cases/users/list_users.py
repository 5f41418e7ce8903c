"""Use cases for listing users."""

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationChannel, User
from app.infrastructure.repositories import UserRepository


def list_users(session: Session, *, skip: int = 0, limit: int = 100) -> Sequence[User]:
    """Return a list of users respecting pagination parameters."""

    return UserRepository(session).list(skip=skip, limit=limit)


def list_active_users(session: Session) -> Sequence[User]:
    return UserRepository(session).list_active()


def list_users_by_channel(session: Session, channel: NotificationChannel) -> Sequence[User]:
    """Return active users opted into ``channel``."""

    repository = UserRepository(session)
    if channel is NotificationChannel.EMAIL:
        return repository.list_active_with_email_enabled()
    if channel is NotificationChannel.SMS:
        return repository.list_active_with_sms_enabled()
    return repository.list_active_with_push_enabled()


def list_users_by_preferences(session: Session, categories: Iterable[str]) -> Sequence[User]:
    wanted = {category.strip() for category in categories if category and category.strip()}
    return UserRepository(session).list_active_with_preferences(wanted)

"""Use case for registering a notification subscriber."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.exceptions import DuplicateEmailError
from app.infrastructure.repositories import UserRepository

from .validators import ensure_name, ensure_valid_email, ensure_valid_phone, normalize_preferences

logger = logging.getLogger(__name__)


def create_user(
    session: Session,
    *,
    first_name: str,
    last_name: str,
    email: str,
    phone_number: str | None = None,
    is_active: bool = True,
    email_enabled: bool = True,
    sms_enabled: bool = False,
    push_enabled: bool = True,
    preferences: Iterable[str] = (),
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = ensure_valid_email(email)
    if repository.exists_by_email(normalized_email):
        raise DuplicateEmailError(f"Email already registered: {normalized_email}")

    user = User(
        id=None,
        first_name=ensure_name(first_name, "First name"),
        last_name=ensure_name(last_name, "Last name"),
        email=normalized_email,
        phone_number=ensure_valid_phone(phone_number),
        is_active=is_active,
        email_enabled=email_enabled,
        sms_enabled=sms_enabled,
        push_enabled=push_enabled,
        preferences=normalize_preferences(preferences),
    )
    saved = repository.create(user)
    logger.info("Created new user with ID: %s", saved.id)
    return saved

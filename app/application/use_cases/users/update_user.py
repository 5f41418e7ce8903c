"""Use case for updating user information."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.exceptions import DuplicateEmailError
from app.infrastructure.repositories import UserRepository

from .get_user import get_user
from .validators import ensure_name, ensure_valid_email, ensure_valid_phone, normalize_preferences

logger = logging.getLogger(__name__)


def update_user(
    session: Session,
    *,
    user_id: int,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
    phone_number: str | None = None,
    is_active: bool | None = None,
    email_enabled: bool | None = None,
    sms_enabled: bool | None = None,
    push_enabled: bool | None = None,
    preferences: Iterable[str] | None = None,
) -> User:
    """Update the provided user with the new values; ``None`` keeps the current value."""

    repository = UserRepository(session)
    current_user = get_user(session, user_id)

    new_email = current_user.email
    if email is not None:
        candidate = ensure_valid_email(email)
        if candidate != current_user.email:
            existing = repository.get_by_email(candidate)
            if existing and existing.id != user_id:
                raise DuplicateEmailError(f"Email already registered: {candidate}")
            new_email = candidate

    updated_user = replace(
        current_user,
        first_name=(
            ensure_name(first_name, "First name")
            if first_name is not None
            else current_user.first_name
        ),
        last_name=(
            ensure_name(last_name, "Last name")
            if last_name is not None
            else current_user.last_name
        ),
        email=new_email,
        phone_number=(
            ensure_valid_phone(phone_number)
            if phone_number is not None
            else current_user.phone_number
        ),
        is_active=is_active if is_active is not None else current_user.is_active,
        email_enabled=(
            email_enabled if email_enabled is not None else current_user.email_enabled
        ),
        sms_enabled=sms_enabled if sms_enabled is not None else current_user.sms_enabled,
        push_enabled=push_enabled if push_enabled is not None else current_user.push_enabled,
        preferences=(
            normalize_preferences(preferences)
            if preferences is not None
            else current_user.preferences
        ),
    )
    saved = repository.update(updated_user)
    logger.info("Updated user with ID: %s", saved.id)
    return saved

"""Use cases for retrieving a single user."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import UserRepository

from .validators import ensure_valid_email


def get_user(session: Session, user_id: int) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError(f"User not found with ID: {user_id}")
    return user


def get_user_by_email(session: Session, email: str) -> User:
    normalized = ensure_valid_email(email)
    user = UserRepository(session).get_by_email(normalized)
    if user is None:
        raise NotFoundError(f"User not found with email: {normalized}")
    return user

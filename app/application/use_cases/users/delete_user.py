"""Use case for deleting a user."""

import logging

from sqlalchemy.orm import Session

from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def delete_user(session: Session, user_id: int) -> None:
    """Delete the specified user along with their preferences and attempt history."""

    if not UserRepository(session).delete(user_id):
        raise NotFoundError(f"User not found with ID: {user_id}")
    logger.info("Deleted user with ID: %s", user_id)

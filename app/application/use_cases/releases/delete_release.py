"""Use case for deleting a watch release."""

import logging

from sqlalchemy.orm import Session

from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import WatchReleaseRepository

logger = logging.getLogger(__name__)


def delete_release(session: Session, release_id: int) -> None:
    """Delete the release and, through cascading, its attempt history."""

    if not WatchReleaseRepository(session).delete(release_id):
        raise NotFoundError(f"Watch release not found with ID: {release_id}")
    logger.info("Deleted watch release with ID: %s", release_id)

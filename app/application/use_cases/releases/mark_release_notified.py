"""Administrative override that flags a release as notified without sending."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import WatchRelease
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import WatchReleaseRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def mark_release_notified(session: Session, release_id: int) -> WatchRelease:
    """Set ``notified`` and ``notified_at`` for the release identified by ``release_id``."""

    release = WatchReleaseRepository(session).mark_notified(release_id, now_in_app_timezone())
    if release is None:
        raise NotFoundError(f"Watch release not found with ID: {release_id}")
    logger.info("Marked watch release with ID: %s as notified", release_id)
    return release

"""Use case for retrieving a single watch release."""

from sqlalchemy.orm import Session

from app.domain.entities import WatchRelease
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import WatchReleaseRepository


def get_release(session: Session, release_id: int) -> WatchRelease:
    """Return the requested release or raise :class:`NotFoundError`."""

    release = WatchReleaseRepository(session).get(release_id)
    if release is None:
        raise NotFoundError(f"Watch release not found with ID: {release_id}")
    return release

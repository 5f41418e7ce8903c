"""Use cases for listing watch releases."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import WatchRelease
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import WatchReleaseRepository
from app.utils import ensure_app_timezone, now_in_app_timezone


def list_releases(session: Session, *, skip: int = 0, limit: int = 100) -> Sequence[WatchRelease]:
    return WatchReleaseRepository(session).list(skip=skip, limit=limit)


def list_unnotified_releases(session: Session) -> Sequence[WatchRelease]:
    return WatchReleaseRepository(session).list_unnotified()


def list_upcoming_releases(
    session: Session, *, since: datetime | None = None
) -> Sequence[WatchRelease]:
    """Return releases dated from ``since`` (default: now), soonest first."""

    return WatchReleaseRepository(session).list_upcoming(since or now_in_app_timezone())


def list_limited_edition_releases(session: Session) -> Sequence[WatchRelease]:
    return WatchReleaseRepository(session).list_limited_editions()


def list_releases_by_brands(session: Session, brands: Iterable[str]) -> Sequence[WatchRelease]:
    return WatchReleaseRepository(session).list_by_brands(brands)


def list_releases_by_date_range(
    session: Session, start_date: datetime, end_date: datetime
) -> Sequence[WatchRelease]:
    start_date = ensure_app_timezone(start_date)
    end_date = ensure_app_timezone(end_date)
    if start_date > end_date:
        raise ValidationError("start_date must not be after end_date")
    return WatchReleaseRepository(session).list_by_release_date_between(start_date, end_date)

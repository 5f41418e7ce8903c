"""Wire the notification core to the SQLAlchemy repositories."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.application.ports import ChannelSenderSet
from app.config import Settings, get_settings
from app.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
    WatchReleaseRepository,
)

from .dispatch import DispatchEngine
from .scans import ReleaseScanner


def build_dispatch_engine(
    session: Session,
    senders: ChannelSenderSet,
    settings: Settings | None = None,
) -> DispatchEngine:
    """Return a :class:`DispatchEngine` bound to ``session``."""

    settings = settings or get_settings()
    return DispatchEngine(
        WatchReleaseRepository(session),
        UserRepository(session),
        NotificationRepository(session),
        senders,
        channel_timeout=settings.dispatch_channel_timeout_seconds,
        max_concurrency=settings.dispatch_max_concurrency,
    )


def build_release_scanner(
    session: Session,
    senders: ChannelSenderSet,
    settings: Settings | None = None,
) -> ReleaseScanner:
    return ReleaseScanner(
        WatchReleaseRepository(session),
        build_dispatch_engine(session, senders, settings),
    )


__all__ = ["build_dispatch_engine", "build_release_scanner"]

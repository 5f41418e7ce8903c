"""APScheduler wiring for the periodic release scans.

Three interval jobs run inside the application's event loop. Each run opens
its own database session, so a scan never shares state with a request
handler or with another scan.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.orm import Session

from app.application.ports import ChannelSenderSet
from app.application.use_cases.notifications import build_release_scanner
from app.config import Settings, get_settings
from app.infrastructure.database import SessionLocal

logger = logging.getLogger(__name__)

NEW_RELEASE_SCAN = "scan_new_releases"
UPCOMING_RELEASE_SCAN = "scan_upcoming_releases"
LIMITED_EDITION_SCAN = "scan_limited_editions"

SCAN_NAMES = (NEW_RELEASE_SCAN, UPCOMING_RELEASE_SCAN, LIMITED_EDITION_SCAN)


async def run_release_scan(
    scan_name: str,
    senders: ChannelSenderSet,
    *,
    settings: Settings | None = None,
    session_factory: Callable[[], Session] = SessionLocal,
) -> int:
    """Run one scan with a fresh session and return how many releases it dispatched."""

    if scan_name not in SCAN_NAMES:
        raise ValueError(f"Unknown release scan: {scan_name}")

    session = session_factory()
    try:
        scanner = build_release_scanner(session, senders, settings)
        return await getattr(scanner, scan_name)()
    except Exception:
        logger.exception("Release scan %s failed", scan_name)
        return 0
    finally:
        session.close()


def build_release_scan_scheduler(
    senders: ChannelSenderSet,
    settings: Settings | None = None,
    *,
    session_factory: Callable[[], Session] = SessionLocal,
) -> AsyncIOScheduler:
    """Return a scheduler with the three scan jobs registered but not started.

    Each job first runs as soon as the scheduler starts, then on its interval.
    """

    settings = settings or get_settings()
    scheduler = AsyncIOScheduler(
        timezone="UTC",
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": 60,
        },
    )

    intervals = {
        NEW_RELEASE_SCAN: settings.new_release_scan_minutes,
        UPCOMING_RELEASE_SCAN: settings.upcoming_release_scan_minutes,
        LIMITED_EDITION_SCAN: settings.limited_edition_scan_minutes,
    }
    for scan_name, minutes in intervals.items():
        scheduler.add_job(
            func=run_release_scan,
            trigger=IntervalTrigger(minutes=minutes),
            args=(scan_name, senders),
            kwargs={"settings": settings, "session_factory": session_factory},
            id=scan_name,
            name=scan_name.replace("_", " "),
            replace_existing=True,
            next_run_time=datetime.now(timezone.utc),
        )
        logger.info("Scheduled %s every %d minutes", scan_name, minutes)

    return scheduler


__all__ = [
    "LIMITED_EDITION_SCAN",
    "NEW_RELEASE_SCAN",
    "SCAN_NAMES",
    "UPCOMING_RELEASE_SCAN",
    "build_release_scan_scheduler",
    "run_release_scan",
]

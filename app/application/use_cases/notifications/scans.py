"""Periodic scans that look for releases needing a notification pass."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from app.application.ports import Dispatcher, ReleaseStore
from app.domain.entities import DispatchRequest, WatchRelease
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

NEW_RELEASE_MESSAGE = "A new watch release is now available!"
UPCOMING_RELEASE_MESSAGE = "Don't miss out! This watch will be released soon."
LIMITED_EDITION_MESSAGE = "Limited edition alert! Only {quantity} pieces available."
LIMITED_EDITION_UNKNOWN_QUANTITY_MESSAGE = (
    "Limited edition alert! Only a limited number of pieces available."
)


def new_release_request(release: WatchRelease) -> DispatchRequest:
    return DispatchRequest(
        release_id=release.id,
        send_email=True,
        send_sms=False,
        send_push=True,
        custom_message=NEW_RELEASE_MESSAGE,
    )


def upcoming_release_request(release: WatchRelease) -> DispatchRequest:
    return DispatchRequest(
        release_id=release.id,
        send_email=True,
        send_sms=False,
        send_push=True,
        custom_message=UPCOMING_RELEASE_MESSAGE,
    )


def limited_edition_request(release: WatchRelease) -> DispatchRequest:
    if release.limited_quantity is None:
        message = LIMITED_EDITION_UNKNOWN_QUANTITY_MESSAGE
    else:
        message = LIMITED_EDITION_MESSAGE.format(quantity=release.limited_quantity)
    return DispatchRequest(
        release_id=release.id,
        send_email=True,
        send_sms=True,
        send_push=True,
        custom_message=message,
    )


class ReleaseScanner:
    """The three scan jobs run by the scheduler.

    Every scan catches its own failures: a release that cannot be dispatched
    is logged and skipped, and a store error aborts only the current run.
    Each scan returns how many releases were dispatched.
    """

    def __init__(
        self,
        releases: ReleaseStore,
        dispatcher: Dispatcher,
        *,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._releases = releases
        self._dispatcher = dispatcher
        self._clock = clock

    async def scan_new_releases(self) -> int:
        logger.info("Starting scheduled notification check for new watch releases")
        try:
            releases = list(self._releases.list_unnotified())
            if not releases:
                logger.info("No unnotified watch releases found")
                return 0
            logger.info("Found %d unnotified watch releases", len(releases))
            return await self._dispatch_each(releases, new_release_request, "new release")
        except Exception:
            logger.exception("Error in scheduled new release scan")
            return 0

    async def scan_upcoming_releases(self) -> int:
        """Remind subscribers about releases dated from now on.

        This scan ignores the ``notified`` flag, so releases already
        announced by the new-release scan are dispatched again as reminders.
        """

        logger.info("Starting scheduled reminder check for upcoming watch releases")
        try:
            releases = list(self._releases.list_upcoming(self._clock()))
            if not releases:
                logger.info("No upcoming watch releases found")
                return 0
            logger.info("Found %d upcoming watch releases", len(releases))
            return await self._dispatch_each(
                releases, upcoming_release_request, "upcoming release reminder"
            )
        except Exception:
            logger.exception("Error in scheduled upcoming release scan")
            return 0

    async def scan_limited_editions(self) -> int:
        logger.info("Starting scheduled notification check for limited edition releases")
        try:
            releases = list(self._releases.list_limited_editions())
            if not releases:
                logger.info("No limited edition releases found")
                return 0
            logger.info("Found %d limited edition releases", len(releases))
            pending = [release for release in releases if not release.notified]
            return await self._dispatch_each(
                pending, limited_edition_request, "limited edition"
            )
        except Exception:
            logger.exception("Error in scheduled limited edition scan")
            return 0

    async def _dispatch_each(
        self,
        releases: Iterable[WatchRelease],
        build_request: Callable[[WatchRelease], DispatchRequest],
        label: str,
    ) -> int:
        dispatched = 0
        for release in releases:
            try:
                outcome = await self._dispatcher.dispatch(build_request(release))
            except Exception:
                logger.exception(
                    "Failed to send %s notifications for watch release %s (%s)",
                    label,
                    release.id,
                    release.name,
                )
                continue
            dispatched += 1
            logger.info(
                "Sent %s notifications for watch release %s (%s): %d sent, %d failed",
                label,
                release.id,
                release.name,
                outcome.sent,
                outcome.failed,
            )
        return dispatched


__all__ = [
    "LIMITED_EDITION_MESSAGE",
    "NEW_RELEASE_MESSAGE",
    "UPCOMING_RELEASE_MESSAGE",
    "ReleaseScanner",
    "limited_edition_request",
    "new_release_request",
    "upcoming_release_request",
]

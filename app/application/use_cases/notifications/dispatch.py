"""Fan a watch release out to its subscribers over every enabled channel."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import anyio

from app.application.ports import ChannelSenderSet, NotificationLog, ReleaseStore, UserStore
from app.domain.entities import (
    DispatchOutcome,
    DispatchRequest,
    NotificationAttempt,
    NotificationChannel,
    User,
    WatchRelease,
)
from app.domain.exceptions import ChannelDeliveryError, NotFoundError
from app.utils import now_in_app_timezone

from .content import render_message, resolve_recipient
from .recipients import RecipientSelector

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_CONCURRENCY = 8


@dataclass
class _Tally:
    sent: int = 0
    failed: int = 0
    skipped: int = 0


def eligible_channels(user: User, request: DispatchRequest) -> list[NotificationChannel]:
    """Return the channels ``user`` should be contacted on for ``request``."""

    channels: list[NotificationChannel] = []
    if request.send_email and user.email_enabled:
        channels.append(NotificationChannel.EMAIL)
    if request.send_sms and user.can_receive_sms:
        channels.append(NotificationChannel.SMS)
    if request.send_push and user.push_enabled:
        channels.append(NotificationChannel.PUSH)
    return channels


class DispatchEngine:
    """Send one release to its target users and record every attempt.

    Each (user, channel) pair runs as its own task inside an anyio task group,
    so a slow or failing channel never holds up the others. A capacity limiter
    caps how many transports run at once and every transport call is bounded
    by ``channel_timeout``. The release is marked notified once the task group
    has joined, whatever the individual attempts returned. An attempt whose
    log row cannot be written is counted as failed.
    """

    def __init__(
        self,
        releases: ReleaseStore,
        users: UserStore,
        notifications: NotificationLog,
        senders: ChannelSenderSet,
        *,
        selector: RecipientSelector | None = None,
        channel_timeout: float = DEFAULT_CHANNEL_TIMEOUT_SECONDS,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        if channel_timeout <= 0:
            raise ValueError("channel_timeout must be positive")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._releases = releases
        self._notifications = notifications
        self._senders = senders
        self._selector = selector or RecipientSelector(users)
        self._channel_timeout = channel_timeout
        self._max_concurrency = max_concurrency
        self._clock = clock

    async def dispatch(self, request: DispatchRequest) -> DispatchOutcome:
        release = self._releases.get(request.release_id)
        if release is None:
            raise NotFoundError(f"Watch release with id {request.release_id} not found")

        targets = self._selector.select_targets(request)
        tally = _Tally()
        limiter = anyio.CapacityLimiter(self._max_concurrency)

        async with anyio.create_task_group() as task_group:
            for user in targets:
                channels = eligible_channels(user, request)
                if not channels:
                    tally.skipped += 1
                    continue
                for channel in channels:
                    task_group.start_soon(
                        self._attempt,
                        release,
                        user,
                        channel,
                        request.custom_message,
                        limiter,
                        tally,
                        name=f"notify-{release.id}-{user.id}-{channel.value}",
                    )

        self._releases.mark_notified(release.id, self._clock())

        logger.info(
            "Dispatched watch release %s (%s) to %d users: %d sent, %d failed, %d skipped",
            release.id,
            release.name,
            len(targets),
            tally.sent,
            tally.failed,
            tally.skipped,
        )
        return DispatchOutcome(sent=tally.sent, failed=tally.failed, skipped=tally.skipped)

    async def _attempt(
        self,
        release: WatchRelease,
        user: User,
        channel: NotificationChannel,
        custom_message: str | None,
        limiter: anyio.CapacityLimiter,
        tally: _Tally,
    ) -> None:
        subject: str | None = None
        body: str | None = None
        recipient: str | None = None
        error: str | None = None

        try:
            recipient = resolve_recipient(channel, user)
            message = render_message(channel, release, user, custom_message)
            subject, body = message.subject, message.body
            sender = self._senders.for_channel(channel)
            async with limiter:
                with anyio.move_on_after(self._channel_timeout) as scope:
                    await anyio.to_thread.run_sync(
                        sender.send, recipient, message, abandon_on_cancel=True
                    )
            if scope.cancelled_caught:
                error = f"{channel.value} delivery timed out after {self._channel_timeout:g}s"
                logger.warning(
                    "%s notification to user %s timed out for release %s",
                    channel.value,
                    user.id,
                    release.id,
                )
        except ChannelDeliveryError as exc:
            error = f"{channel.value} sending failed: {exc}"
            logger.error(
                "Failed to send %s notification to user %s: %s", channel.value, user.id, exc
            )
        except Exception as exc:
            error = f"{channel.value} sending failed: {type(exc).__name__}: {exc}"
            logger.exception(
                "Unexpected error sending %s notification to user %s", channel.value, user.id
            )

        now = self._clock()
        if error is None:
            attempt = NotificationAttempt.sent(
                user_id=user.id,
                release_id=release.id,
                channel=channel,
                subject=subject,
                message=body,
                recipient=recipient,
                at=now,
            )
        else:
            attempt = NotificationAttempt.failed(
                user_id=user.id,
                release_id=release.id,
                channel=channel,
                error_message=error,
                subject=subject,
                message=body,
                recipient=recipient,
                at=now,
            )

        try:
            self._notifications.create(attempt)
        except Exception:
            # The delivery outcome is lost, so the attempt counts as failed.
            logger.exception(
                "Could not record %s attempt for user %s and release %s",
                channel.value,
                user.id,
                release.id,
            )
            tally.failed += 1
            return

        if error is None:
            tally.sent += 1
            logger.info("%s notification sent to %s", channel.value, recipient)
        else:
            tally.failed += 1


__all__ = ["DispatchEngine", "eligible_channels"]

"""Capabilities the notification core needs from stores and transports.

The dispatch engine and the scan jobs only talk to these protocols. The
SQLAlchemy repositories and the SendGrid/Twilio/HTTP senders satisfy them in
production, and tests pass in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from app.domain.entities import (
    DispatchOutcome,
    DispatchRequest,
    NotificationAttempt,
    NotificationChannel,
    RenderedMessage,
    User,
    WatchRelease,
)


class ReleaseStore(Protocol):
    def get(self, release_id: int) -> WatchRelease | None: ...

    def list_unnotified(self) -> Sequence[WatchRelease]: ...

    def list_upcoming(self, since: datetime) -> Sequence[WatchRelease]: ...

    def list_limited_editions(self) -> Sequence[WatchRelease]: ...

    def mark_notified(self, release_id: int, notified_at: datetime) -> WatchRelease | None: ...


class UserStore(Protocol):
    def list_active(self) -> Sequence[User]: ...

    def list_active_with_preferences(self, tags: Iterable[str]) -> Sequence[User]: ...

    def list_active_with_preferences_and_email(self, tags: Iterable[str]) -> Sequence[User]: ...


class NotificationLog(Protocol):
    def create(self, attempt: NotificationAttempt) -> NotificationAttempt: ...


@runtime_checkable
class ChannelSender(Protocol):
    """Deliver one rendered message over one channel.

    ``send`` returns normally on success and raises
    :class:`~app.domain.exceptions.ChannelDeliveryError` when the transport
    rejects the message. It is a blocking call; the engine runs it in a worker
    thread with a timeout.
    """

    channel: NotificationChannel

    def send(self, recipient: str, message: RenderedMessage) -> None: ...


class Dispatcher(Protocol):
    async def dispatch(self, request: DispatchRequest) -> DispatchOutcome: ...


@dataclass(frozen=True)
class ChannelSenderSet:
    """The three channel senders used for a dispatch pass."""

    email: ChannelSender
    sms: ChannelSender
    push: ChannelSender

    def for_channel(self, channel: NotificationChannel) -> ChannelSender:
        if channel is NotificationChannel.EMAIL:
            return self.email
        if channel is NotificationChannel.SMS:
            return self.sms
        if channel is NotificationChannel.PUSH:
            return self.push
        raise ValueError(f"Unsupported notification channel: {channel!r}")


__all__ = [
    "ChannelSender",
    "ChannelSenderSet",
    "Dispatcher",
    "NotificationLog",
    "ReleaseStore",
    "UserStore",
]

"""Shared fixtures: a throwaway SQLite database and in-memory doubles for the core."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in (
    "SENDGRID_API_KEY",
    "SENDGRID_SENDER",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_FROM_NUMBER",
    "PUSH_GATEWAY_URL",
    "PUSH_ACCESS_TOKEN",
):
    os.environ.pop(_name, None)

from app.application.ports import ChannelSenderSet  # noqa: E402
from app.domain.entities import (  # noqa: E402
    NotificationAttempt,
    NotificationChannel,
    RenderedMessage,
    User,
    WatchRelease,
)
from app.domain.exceptions import ChannelDeliveryError  # noqa: E402

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_user(user_id: int, **overrides) -> User:
    values = {
        "id": user_id,
        "first_name": f"User{user_id}",
        "last_name": "Tester",
        "email": f"user{user_id}@example.com",
        "phone_number": None,
        "is_active": True,
        "email_enabled": True,
        "sms_enabled": False,
        "push_enabled": True,
        "preferences": set(),
    }
    values.update(overrides)
    return User(**values)


def make_release(release_id: int = 1, **overrides) -> WatchRelease:
    values = {
        "id": release_id,
        "name": "Dive Pro 300",
        "brand": "SportTech",
        "model_number": "ST-DP300-2024",
        "description": "Professional diving watch with 300m water resistance",
        "release_date": FIXED_NOW,
        "price": Decimal("1200.00"),
        "currency": "USD",
        "categories": {"sport", "dive"},
        "product_url": "https://example.com/watches/dive-pro-300",
    }
    values.update(overrides)
    return WatchRelease(**values)


class InMemoryReleaseStore:
    def __init__(self, releases: Iterable[WatchRelease] = ()) -> None:
        self.releases = {release.id: release for release in releases}
        self.mark_calls: list[int] = []

    def get(self, release_id):
        return self.releases.get(release_id)

    def list_unnotified(self):
        return [release for release in self.releases.values() if not release.notified]

    def list_upcoming(self, since):
        upcoming = [
            release
            for release in self.releases.values()
            if release.release_date is not None and release.release_date >= since
        ]
        return sorted(upcoming, key=lambda release: release.release_date)

    def list_limited_editions(self):
        return [release for release in self.releases.values() if release.is_limited_edition]

    def mark_notified(self, release_id, notified_at):
        self.mark_calls.append(release_id)
        release = self.releases.get(release_id)
        if release is not None:
            release.mark_notified(notified_at)
        return release


class InMemoryUserStore:
    def __init__(self, users: Iterable[User] = ()) -> None:
        self.users = list(users)

    def list_active(self):
        return [user for user in self.users if user.is_active]

    def list_active_with_preferences(self, tags):
        wanted = set(tags)
        return [user for user in self.list_active() if user.preferences & wanted]

    def list_active_with_preferences_and_email(self, tags):
        return [user for user in self.list_active_with_preferences(tags) if user.email_enabled]


class InMemoryNotificationLog:
    def __init__(self) -> None:
        self.attempts: list[NotificationAttempt] = []

    def create(self, attempt):
        attempt.id = len(self.attempts) + 1
        self.attempts.append(attempt)
        return attempt

    def for_user(self, user_id):
        return [attempt for attempt in self.attempts if attempt.user_id == user_id]


class RecordingSender:
    """Channel double that records deliveries and can be told to fail."""

    def __init__(self, channel: NotificationChannel, *, fail_with: str | None = None, delay: float = 0.0):
        self.channel = channel
        self.fail_with = fail_with
        self.delay = delay
        self.sent: list[tuple[str, RenderedMessage]] = []

    def send(self, recipient: str, message: RenderedMessage) -> None:
        if self.delay:
            time.sleep(self.delay)
        if self.fail_with is not None:
            raise ChannelDeliveryError(self.fail_with, channel=self.channel.value)
        self.sent.append((recipient, message))


def recording_senders(**overrides) -> ChannelSenderSet:
    senders = {
        "email": RecordingSender(NotificationChannel.EMAIL),
        "sms": RecordingSender(NotificationChannel.SMS),
        "push": RecordingSender(NotificationChannel.PUSH),
    }
    senders.update(overrides)
    return ChannelSenderSet(**senders)


@pytest.fixture
def db_session():
    """Yield a session on a freshly created schema."""

    from app.infrastructure import database

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()
        database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)


def pytest_sessionfinish(session, exitstatus):
    from app.infrastructure import database

    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()

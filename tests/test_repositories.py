"""SQLAlchemy repositories and use cases against a SQLite database."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from conftest import FIXED_NOW, recording_senders

from app.application.use_cases.notifications import (
    build_dispatch_engine,
    count_sent_notifications_for_user,
    list_notifications_by_date_range,
    list_notifications_by_status,
    list_user_notifications,
)
from app.application.use_cases.releases import (
    create_release,
    delete_release,
    get_release,
    list_releases_by_brands,
    list_releases_by_date_range,
    list_upcoming_releases,
    mark_release_notified,
    update_release,
)
from app.application.use_cases.users import create_user, delete_user, update_user
from app.domain.entities import (
    DispatchRequest,
    NotificationAttempt,
    NotificationChannel,
    NotificationStatus,
)
from app.domain.exceptions import DuplicateEmailError, NotFoundError, ValidationError
from app.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
    WatchReleaseRepository,
)


def _release(session, **overrides):
    values = {
        "name": "Chronograph Master",
        "brand": "Swiss Luxury",
        "release_date": FIXED_NOW + timedelta(days=7),
        "price": Decimal("8500.00"),
        "categories": ["luxury", "swiss"],
        "features": ["automatic", "chronograph"],
    }
    values.update(overrides)
    return create_release(session, **values)


def _user(session, email, **overrides):
    values = {"first_name": "John", "last_name": "Doe", "email": email}
    values.update(overrides)
    return create_user(session, **values)


def test_release_round_trip_keeps_tags_and_timezone(db_session) -> None:
    created = _release(db_session)

    loaded = get_release(db_session, created.id)

    assert loaded.categories == {"luxury", "swiss"}
    assert loaded.features == {"automatic", "chronograph"}
    assert loaded.price == Decimal("8500.00")
    assert loaded.release_date == FIXED_NOW + timedelta(days=7)
    assert loaded.notified is False


def test_update_release_replaces_tags_and_keeps_notified(db_session) -> None:
    created = _release(db_session)
    mark_release_notified(db_session, created.id)

    updated = update_release(
        db_session,
        created.id,
        name="Chronograph Master II",
        brand="Swiss Luxury",
        categories=["luxury", "limited"],
        features=["automatic"],
        is_limited_edition=True,
        limited_quantity=50,
    )

    assert updated.name == "Chronograph Master II"
    assert updated.categories == {"luxury", "limited"}
    assert updated.features == {"automatic"}
    assert updated.notified is True


def test_release_validation_errors(db_session) -> None:
    with pytest.raises(ValidationError):
        _release(db_session, price=Decimal("-1"))
    with pytest.raises(ValidationError):
        _release(db_session, limited_quantity=10, is_limited_edition=False)
    with pytest.raises(ValidationError):
        _release(db_session, currency="dollars")


def test_release_queries(db_session) -> None:
    past = _release(db_session, name="Seiko Presage", brand="Seiko", release_date=FIXED_NOW - timedelta(days=1))
    soon = _release(db_session, name="Dive Pro 300", brand="SportTech", release_date=FIXED_NOW + timedelta(days=3))
    later = _release(db_session, release_date=FIXED_NOW + timedelta(days=7))

    upcoming = list_upcoming_releases(db_session, since=FIXED_NOW)
    assert [release.id for release in upcoming] == [soon.id, later.id]

    by_brand = list_releases_by_brands(db_session, ["Seiko", "SportTech"])
    assert {release.id for release in by_brand} == {past.id, soon.id}

    in_range = list_releases_by_date_range(
        db_session, FIXED_NOW - timedelta(days=2), FIXED_NOW + timedelta(days=3)
    )
    assert [release.id for release in in_range] == [past.id, soon.id]

    with pytest.raises(ValidationError):
        list_releases_by_date_range(db_session, FIXED_NOW, FIXED_NOW - timedelta(days=1))


def test_mark_and_delete_unknown_release(db_session) -> None:
    with pytest.raises(NotFoundError):
        mark_release_notified(db_session, 404)
    with pytest.raises(NotFoundError):
        delete_release(db_session, 404)
    with pytest.raises(NotFoundError):
        get_release(db_session, 404)


def test_user_email_must_be_unique(db_session) -> None:
    _user(db_session, "john.doe@example.com")
    other = _user(db_session, "jane.smith@example.com", first_name="Jane")

    with pytest.raises(DuplicateEmailError):
        _user(db_session, "john.doe@example.com")
    with pytest.raises(DuplicateEmailError):
        update_user(db_session, user_id=other.id, email="john.doe@example.com")


def test_preference_queries(db_session) -> None:
    luxury = _user(db_session, "a@example.com", preferences=["luxury", "swiss"])
    _user(db_session, "b@example.com", preferences=["sport"])
    _user(db_session, "c@example.com", preferences=["luxury"], is_active=False)
    no_email = _user(db_session, "d@example.com", preferences=["luxury"], email_enabled=False)

    repository = UserRepository(db_session)

    matching = repository.list_active_with_preferences(["luxury"])
    assert [user.id for user in matching] == [luxury.id, no_email.id]

    with_email = repository.list_active_with_preferences_and_email(["luxury", "swiss"])
    assert [user.id for user in with_email] == [luxury.id]

    assert repository.list_active_with_preferences([]) == []


def test_update_user_changes_preferences(db_session) -> None:
    user = _user(db_session, "a@example.com", preferences=["luxury"])

    updated = update_user(
        db_session, user_id=user.id, preferences=["dive", "german"], sms_enabled=True, phone_number="+15550001"
    )

    assert updated.preferences == {"dive", "german"}
    assert updated.can_receive_sms is True
    assert updated.first_name == "John"


def test_attempt_log_queries(db_session) -> None:
    release = _release(db_session)
    user = _user(db_session, "a@example.com")
    log = NotificationRepository(db_session)
    log.create(
        NotificationAttempt.sent(
            user_id=user.id,
            release_id=release.id,
            channel=NotificationChannel.EMAIL,
            subject="New Watch Release: Chronograph Master",
            message="body",
            recipient=user.email,
            at=FIXED_NOW,
        )
    )
    log.create(
        NotificationAttempt.failed(
            user_id=user.id,
            release_id=release.id,
            channel=NotificationChannel.PUSH,
            error_message="",
            at=FIXED_NOW + timedelta(minutes=5),
        )
    )

    assert count_sent_notifications_for_user(db_session, user.id) == 1
    assert [attempt.channel for attempt in list_user_notifications(db_session, user.id)] == [
        NotificationChannel.PUSH,
        NotificationChannel.EMAIL,
    ]
    [failed] = list_notifications_by_status(db_session, "FAILED")
    assert failed.error_message == "Unknown delivery error"
    assert failed.sent_at is None

    window = list_notifications_by_date_range(db_session, FIXED_NOW, FIXED_NOW)
    assert [attempt.status for attempt in window] == [NotificationStatus.SENT]

    with pytest.raises(ValidationError):
        list_notifications_by_status(db_session, "DELIVERED")
    with pytest.raises(ValidationError):
        list_notifications_by_date_range(db_session, FIXED_NOW, FIXED_NOW - timedelta(seconds=1))


def test_deleting_a_user_removes_their_attempts(db_session) -> None:
    release = _release(db_session)
    user = _user(db_session, "a@example.com")
    NotificationRepository(db_session).create(
        NotificationAttempt.sent(
            user_id=user.id,
            release_id=release.id,
            channel=NotificationChannel.EMAIL,
            subject="s",
            message="m",
            recipient=user.email,
            at=FIXED_NOW,
        )
    )

    delete_user(db_session, user.id)

    assert list_user_notifications(db_session, user.id) == []
    with pytest.raises(NotFoundError):
        delete_user(db_session, user.id)


@pytest.mark.anyio
async def test_dispatch_through_sql_repositories(db_session) -> None:
    release = _release(db_session)
    _user(db_session, "a@example.com", preferences=["luxury"])
    _user(db_session, "b@example.com", preferences=["sport"])
    senders = recording_senders()

    outcome = await build_dispatch_engine(db_session, senders).dispatch(
        DispatchRequest(release_id=release.id, categories=frozenset({"luxury"}))
    )

    assert (outcome.sent, outcome.failed, outcome.skipped) == (2, 0, 0)
    assert WatchReleaseRepository(db_session).get(release.id).notified is True
    rows = NotificationRepository(db_session).list_for_release(release.id)
    assert {row.channel for row in rows} == {NotificationChannel.EMAIL, NotificationChannel.PUSH}
    assert all(row.recipient == "a@example.com" for row in rows)

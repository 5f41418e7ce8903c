"""Behaviour of the notification fan-out engine."""

from __future__ import annotations

import pytest

from conftest import (
    FIXED_NOW,
    InMemoryNotificationLog,
    InMemoryReleaseStore,
    InMemoryUserStore,
    RecordingSender,
    make_release,
    make_user,
    recording_senders,
)

from app.application.use_cases.notifications import DispatchEngine, eligible_channels
from app.domain.entities import DispatchRequest, NotificationChannel, NotificationStatus
from app.domain.exceptions import NotFoundError


def _engine(releases, users, log, senders=None, **kwargs) -> DispatchEngine:
    return DispatchEngine(
        releases,
        users,
        log,
        senders or recording_senders(),
        clock=lambda: FIXED_NOW,
        **kwargs,
    )


@pytest.mark.anyio
async def test_release_is_marked_notified_even_without_recipients() -> None:
    releases = InMemoryReleaseStore([make_release(1)])
    log = InMemoryNotificationLog()

    outcome = await _engine(releases, InMemoryUserStore(), log).dispatch(DispatchRequest(release_id=1))

    assert releases.get(1).notified is True
    assert releases.get(1).notified_at == FIXED_NOW
    assert log.attempts == []
    assert (outcome.sent, outcome.failed, outcome.skipped) == (0, 0, 0)


@pytest.mark.anyio
async def test_unknown_release_raises_without_touching_stores() -> None:
    releases = InMemoryReleaseStore()
    log = InMemoryNotificationLog()
    users = InMemoryUserStore([make_user(1)])

    with pytest.raises(NotFoundError):
        await _engine(releases, users, log).dispatch(DispatchRequest(release_id=99))

    assert releases.mark_calls == []
    assert log.attempts == []


@pytest.mark.anyio
async def test_sporttech_scenario() -> None:
    release = make_release(1, brand="SportTech")
    user_a = make_user(1, email_enabled=True, push_enabled=True)
    user_b = make_user(
        2,
        email_enabled=False,
        sms_enabled=True,
        push_enabled=False,
        phone_number="+15550001",
    )
    user_c = make_user(3, is_active=False)
    releases = InMemoryReleaseStore([release])
    log = InMemoryNotificationLog()
    senders = recording_senders()

    outcome = await _engine(
        releases, InMemoryUserStore([user_a, user_b, user_c]), log, senders
    ).dispatch(
        DispatchRequest(
            release_id=1,
            send_email=True,
            send_sms=False,
            send_push=True,
            custom_message="test",
        )
    )

    rows_a = log.for_user(1)
    assert sorted(attempt.channel for attempt in rows_a) == [
        NotificationChannel.EMAIL,
        NotificationChannel.PUSH,
    ]
    assert all(attempt.status is NotificationStatus.SENT for attempt in rows_a)
    assert all(attempt.sent_at == FIXED_NOW for attempt in rows_a)
    assert log.for_user(2) == []
    assert log.for_user(3) == []
    assert release.notified is True
    assert outcome.sent == 2
    assert outcome.failed == 0
    assert outcome.skipped == 1

    email_recipient, email_message = senders.email.sent[0]
    assert email_recipient == "user1@example.com"
    assert email_message.subject == "New Watch Release: Dive Pro 300"
    assert "test" in email_message.body
    push_recipient, _ = senders.push.sent[0]
    assert push_recipient == "user1@example.com"


@pytest.mark.anyio
async def test_every_attempt_row_is_terminal() -> None:
    users = InMemoryUserStore(
        [
            make_user(1, sms_enabled=True, phone_number="+15550001"),
            make_user(2, sms_enabled=True, phone_number="+15550002"),
        ]
    )
    log = InMemoryNotificationLog()
    senders = recording_senders(sms=RecordingSender(NotificationChannel.SMS, fail_with="rejected"))

    outcome = await _engine(InMemoryReleaseStore([make_release(1)]), users, log, senders).dispatch(
        DispatchRequest(release_id=1, send_sms=True)
    )

    assert len(log.attempts) == 6
    pairs = {(attempt.user_id, attempt.channel) for attempt in log.attempts}
    assert len(pairs) == 6
    assert {attempt.status for attempt in log.attempts} <= {
        NotificationStatus.SENT,
        NotificationStatus.FAILED,
    }
    assert outcome.sent == 4
    assert outcome.failed == 2
    assert outcome.attempted == 6


@pytest.mark.anyio
async def test_sms_opt_in_without_phone_never_produces_sms_row() -> None:
    users = InMemoryUserStore([make_user(1, sms_enabled=True, phone_number=None)])
    log = InMemoryNotificationLog()
    senders = recording_senders()

    await _engine(InMemoryReleaseStore([make_release(1)]), users, log, senders).dispatch(
        DispatchRequest(release_id=1, send_email=False, send_sms=True, send_push=False)
    )

    assert log.attempts == []
    assert senders.sms.sent == []


@pytest.mark.anyio
async def test_failing_sms_sender_records_failed_attempt() -> None:
    users = InMemoryUserStore(
        [make_user(1, email_enabled=False, push_enabled=False, sms_enabled=True, phone_number="+15550001")]
    )
    log = InMemoryNotificationLog()
    senders = recording_senders(
        sms=RecordingSender(NotificationChannel.SMS, fail_with="carrier unreachable")
    )

    outcome = await _engine(InMemoryReleaseStore([make_release(1)]), users, log, senders).dispatch(
        DispatchRequest(release_id=1, send_sms=True)
    )

    [attempt] = log.attempts
    assert attempt.channel is NotificationChannel.SMS
    assert attempt.status is NotificationStatus.FAILED
    assert attempt.error_message
    assert "carrier unreachable" in attempt.error_message
    assert attempt.sent_at is None
    assert attempt.recipient == "+15550001"
    assert outcome.failed == 1


@pytest.mark.anyio
async def test_slow_channel_times_out_without_blocking_others() -> None:
    users = InMemoryUserStore([make_user(1)])
    log = InMemoryNotificationLog()
    senders = recording_senders(email=RecordingSender(NotificationChannel.EMAIL, delay=0.5))

    outcome = await _engine(
        InMemoryReleaseStore([make_release(1)]), users, log, senders, channel_timeout=0.05
    ).dispatch(DispatchRequest(release_id=1))

    by_channel = {attempt.channel: attempt for attempt in log.attempts}
    assert by_channel[NotificationChannel.EMAIL].status is NotificationStatus.FAILED
    assert "timed out" in by_channel[NotificationChannel.EMAIL].error_message
    assert by_channel[NotificationChannel.PUSH].status is NotificationStatus.SENT
    assert outcome.sent == 1
    assert outcome.failed == 1


@pytest.mark.anyio
async def test_unexpected_sender_error_is_recorded_as_failure() -> None:
    class ExplodingSender:
        channel = NotificationChannel.PUSH

        def send(self, recipient, message):
            raise KeyError("boom")

    log = InMemoryNotificationLog()
    senders = recording_senders(push=ExplodingSender())

    await _engine(
        InMemoryReleaseStore([make_release(1)]), InMemoryUserStore([make_user(1)]), log, senders
    ).dispatch(DispatchRequest(release_id=1, send_email=False))

    [attempt] = log.attempts
    assert attempt.status is NotificationStatus.FAILED
    assert "KeyError" in attempt.error_message


@pytest.mark.anyio
async def test_redispatch_appends_new_rows() -> None:
    releases = InMemoryReleaseStore([make_release(1)])
    users = InMemoryUserStore([make_user(1)])
    log = InMemoryNotificationLog()
    engine = _engine(releases, users, log)

    await engine.dispatch(DispatchRequest(release_id=1))
    first_ids = [attempt.id for attempt in log.attempts]
    second = await engine.dispatch(DispatchRequest(release_id=1))

    assert len(first_ids) == 2
    assert len(log.attempts) == 4
    assert [attempt.id for attempt in log.attempts[:2]] == first_ids
    assert second.sent == 2
    assert releases.get(1).notified is True
    assert releases.mark_calls == [1, 1]


@pytest.mark.anyio
async def test_concurrency_limit_of_one_still_delivers_everything() -> None:
    users = InMemoryUserStore([make_user(index) for index in range(1, 6)])
    log = InMemoryNotificationLog()

    outcome = await _engine(
        InMemoryReleaseStore([make_release(1)]), users, log, max_concurrency=1
    ).dispatch(DispatchRequest(release_id=1))

    assert outcome.sent == 10
    assert len(log.attempts) == 10


@pytest.mark.parametrize(
    ("overrides", "request_flags", "expected"),
    [
        ({}, {}, [NotificationChannel.EMAIL, NotificationChannel.PUSH]),
        ({"email_enabled": False}, {}, [NotificationChannel.PUSH]),
        ({"sms_enabled": True, "phone_number": "+1555"}, {"send_sms": True}, [
            NotificationChannel.EMAIL,
            NotificationChannel.SMS,
            NotificationChannel.PUSH,
        ]),
        ({"sms_enabled": True}, {"send_sms": True}, [NotificationChannel.EMAIL, NotificationChannel.PUSH]),
        ({}, {"send_email": False, "send_push": False}, []),
    ],
)
def test_eligible_channels(overrides, request_flags, expected) -> None:
    user = make_user(1, **overrides)
    request = DispatchRequest(release_id=1, **request_flags)

    assert eligible_channels(user, request) == expected


def test_engine_rejects_invalid_limits() -> None:
    with pytest.raises(ValueError):
        _engine(InMemoryReleaseStore(), InMemoryUserStore(), InMemoryNotificationLog(), channel_timeout=0)
    with pytest.raises(ValueError):
        _engine(InMemoryReleaseStore(), InMemoryUserStore(), InMemoryNotificationLog(), max_concurrency=0)


class FlakyNotificationLog(InMemoryNotificationLog):
    """Attempt log whose first write fails."""

    def __init__(self) -> None:
        super().__init__()
        self.failures = 0

    def create(self, attempt):
        if self.failures == 0:
            self.failures += 1
            raise RuntimeError("attempt log unavailable")
        return super().create(attempt)


@pytest.mark.anyio
async def test_failed_attempt_write_does_not_abort_dispatch(caplog) -> None:
    releases = InMemoryReleaseStore([make_release(1)])
    users = InMemoryUserStore([make_user(1), make_user(2), make_user(3)])
    log = FlakyNotificationLog()

    outcome = await _engine(releases, users, log).dispatch(DispatchRequest(release_id=1))

    assert releases.get(1).notified is True
    assert len(log.attempts) == 5
    assert outcome.sent == 5
    assert outcome.failed == 1
    assert "Could not record" in caplog.text


@pytest.mark.anyio
async def test_sender_timeout_error_is_not_reported_as_expiry() -> None:
    class SocketTimeoutSender:
        channel = NotificationChannel.EMAIL

        def send(self, recipient, message):
            raise TimeoutError("read timed out")

    log = InMemoryNotificationLog()
    senders = recording_senders(email=SocketTimeoutSender())

    await _engine(
        InMemoryReleaseStore([make_release(1)]), InMemoryUserStore([make_user(1)]), log, senders
    ).dispatch(DispatchRequest(release_id=1, send_push=False))

    [attempt] = log.attempts
    assert attempt.status is NotificationStatus.FAILED
    assert "TimeoutError: read timed out" in attempt.error_message
    assert "timed out after" not in attempt.error_message

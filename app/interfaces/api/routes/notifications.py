"""Routes to dispatch release notifications and inspect the attempt log."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.ports import ChannelSenderSet
from app.application.use_cases.notifications import (
    DispatchEngine,
    count_sent_notifications_for_user,
    list_notifications_by_date_range,
    list_notifications_by_status,
    list_user_notifications,
    send_test_message,
    send_test_push,
)
from app.domain.entities import DispatchRequest, NotificationChannel
from app.domain.exceptions import ChannelDeliveryError, NotFoundError, ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_channel_senders, get_dispatch_engine
from app.interfaces.api.schemas import (
    ChannelCheckRead,
    DispatchOutcomeRead,
    DispatchRequestIn,
    NotificationAttemptRead,
    NotificationCountRead,
)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.post("/send", response_model=DispatchOutcomeRead)
async def send_notifications(
    payload: DispatchRequestIn,
    engine: DispatchEngine = Depends(get_dispatch_engine),
):
    """Dispatch a release to its subscribers and return the delivery summary."""

    logger.info("Received notification dispatch for watch release %s", payload.release_id)
    try:
        request = DispatchRequest(
            release_id=payload.release_id,
            categories=frozenset(payload.categories),
            brands=frozenset(payload.brands),
            send_email=payload.send_email,
            send_sms=payload.send_sms,
            send_push=payload.send_push,
            custom_message=payload.custom_message,
        )
        outcome = await engine.dispatch(request)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return DispatchOutcomeRead.model_validate(outcome)


@router.get("/user/{user_id}", response_model=list[NotificationAttemptRead])
def read_user_notifications(user_id: int, db: Session = Depends(get_db)):
    attempts = list_user_notifications(db, user_id)
    return [NotificationAttemptRead.model_validate(attempt) for attempt in attempts]


@router.get("/user/{user_id}/count", response_model=NotificationCountRead)
def count_user_notifications(user_id: int, db: Session = Depends(get_db)):
    """Return how many notifications were successfully sent to the user."""

    return NotificationCountRead(user_id=user_id, sent=count_sent_notifications_for_user(db, user_id))


@router.get("/status/{status_value}", response_model=list[NotificationAttemptRead])
def read_notifications_by_status(status_value: str, db: Session = Depends(get_db)):
    try:
        attempts = list_notifications_by_status(db, status_value.upper())
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [NotificationAttemptRead.model_validate(attempt) for attempt in attempts]


@router.get("/date-range", response_model=list[NotificationAttemptRead])
def read_notifications_by_date_range(
    start_date: datetime = Query(..., description="Inclusive lower bound (ISO 8601)"),
    end_date: datetime = Query(..., description="Inclusive upper bound (ISO 8601)"),
    db: Session = Depends(get_db),
):
    try:
        attempts = list_notifications_by_date_range(db, start_date, end_date)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [NotificationAttemptRead.model_validate(attempt) for attempt in attempts]


_TEST_LABELS = {
    NotificationChannel.EMAIL: "email",
    NotificationChannel.SMS: "SMS",
    NotificationChannel.PUSH: "push notification",
}


def _run_test_send(channel: NotificationChannel, send) -> ChannelCheckRead:
    label = _TEST_LABELS[channel]
    try:
        recipient = send()
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ChannelDeliveryError as exc:
        logger.error("Error sending test %s: %s", label, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to send test {label}: {exc}",
        ) from exc
    return ChannelCheckRead(
        channel=channel,
        recipient=recipient,
        detail=f"Test {label} notification sent to: {recipient}",
    )


@router.post("/test-email", response_model=ChannelCheckRead)
def send_test_email(
    email: str = Query(..., description="Address that receives the test email"),
    senders: ChannelSenderSet = Depends(get_channel_senders),
):
    """Send a test email through the configured transport."""

    logger.info("Test email notification requested for %s", email)
    return _run_test_send(
        NotificationChannel.EMAIL,
        lambda: send_test_message(senders, NotificationChannel.EMAIL, email),
    )


@router.post("/test-sms", response_model=ChannelCheckRead)
def send_test_sms(
    phone_number: str = Query(..., description="Phone number that receives the test SMS"),
    senders: ChannelSenderSet = Depends(get_channel_senders),
):
    logger.info("Test SMS notification requested for %s", phone_number)
    return _run_test_send(
        NotificationChannel.SMS,
        lambda: send_test_message(senders, NotificationChannel.SMS, phone_number),
    )


@router.post("/test-push", response_model=ChannelCheckRead)
def send_test_push_notification(
    user_id: int = Query(..., ge=1),
    db: Session = Depends(get_db),
    senders: ChannelSenderSet = Depends(get_channel_senders),
):
    """Send a test push to the topic of an existing user."""

    logger.info("Test push notification requested for user %s", user_id)
    return _run_test_send(
        NotificationChannel.PUSH, lambda: send_test_push(db, senders, user_id)
    )

"""Send one-off test messages through a single channel."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.application.ports import ChannelSenderSet
from app.domain.entities import NotificationChannel
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.repositories import UserRepository

from .content import render_test_message, resolve_recipient

logger = logging.getLogger(__name__)


def send_test_message(
    senders: ChannelSenderSet, channel: NotificationChannel, recipient: str | None
) -> str:
    """Deliver the canned test message to ``recipient`` and return the address used.

    Transport failures surface as :class:`ChannelDeliveryError`. Nothing is
    written to the attempt log.
    """

    address = (recipient or "").strip()
    if not address:
        raise ValidationError(f"A recipient is required for a test {channel.value} message")
    senders.for_channel(channel).send(address, render_test_message(channel))
    logger.info("Test %s message sent to %s", channel.value, address)
    return address


def send_test_push(session: Session, senders: ChannelSenderSet, user_id: int) -> str:
    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError(f"User with id {user_id} not found")
    return send_test_message(
        senders, NotificationChannel.PUSH, resolve_recipient(NotificationChannel.PUSH, user)
    )


__all__ = ["send_test_message", "send_test_push"]

"""Fallback sender used when a channel has no transport credentials."""

from __future__ import annotations

import logging

from app.domain.entities import NotificationChannel, RenderedMessage

logger = logging.getLogger(__name__)


class LoggingChannelSender:
    """Log the message instead of delivering it and report success.

    Local development runs without SendGrid, Twilio or a push gateway; the
    dispatch pipeline still records SENT attempts so the flow can be followed
    end to end.
    """

    def __init__(self, channel: NotificationChannel) -> None:
        self.channel = channel

    def send(self, recipient: str, message: RenderedMessage) -> None:
        logger.info(
            "%s transport not configured; would send %r to %s",
            self.channel.value,
            message.subject,
            recipient,
        )
        logger.debug("%s message body for %s:\n%s", self.channel.value, recipient, message.body)

"""Channel transports used by the dispatch engine."""

from __future__ import annotations

import logging

from app.application.ports import ChannelSenderSet
from app.config import Settings, get_settings
from app.domain.entities import NotificationChannel

from .email import SendGridEmailSender
from .logging_sender import LoggingChannelSender
from .push import HttpPushSender, topic_for
from .sms import TwilioSmsSender

logger = logging.getLogger(__name__)


def build_channel_senders(settings: Settings | None = None) -> ChannelSenderSet:
    """Build one sender per channel, logging-only where credentials are missing."""

    settings = settings or get_settings()

    if settings.email_configured:
        email = SendGridEmailSender(settings.sendgrid_api_key, settings.sendgrid_sender)
    else:
        logger.warning("SendGrid configuration incomplete; email notifications will only be logged")
        email = LoggingChannelSender(NotificationChannel.EMAIL)

    if settings.sms_configured:
        sms = TwilioSmsSender(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            settings.twilio_from_number,
        )
    else:
        logger.warning("Twilio configuration incomplete; SMS notifications will only be logged")
        sms = LoggingChannelSender(NotificationChannel.SMS)

    if settings.push_configured:
        push = HttpPushSender(
            settings.push_gateway_url,
            access_token=settings.push_access_token,
            topic_prefix=settings.push_topic_prefix,
            timeout=settings.dispatch_channel_timeout_seconds,
        )
    else:
        logger.warning("Push gateway not configured; push notifications will only be logged")
        push = LoggingChannelSender(NotificationChannel.PUSH)

    return ChannelSenderSet(email=email, sms=sms, push=push)


def close_channel_senders(senders: ChannelSenderSet) -> None:
    """Release transport resources held by senders that own any."""

    for sender in (senders.email, senders.sms, senders.push):
        close = getattr(sender, "close", None)
        if callable(close):
            close()


__all__ = [
    "HttpPushSender",
    "LoggingChannelSender",
    "SendGridEmailSender",
    "TwilioSmsSender",
    "build_channel_senders",
    "close_channel_senders",
    "topic_for",
]

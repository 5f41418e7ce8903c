"""Deliver release text messages through Twilio."""

from __future__ import annotations

import logging

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from app.domain.entities import NotificationChannel, RenderedMessage
from app.domain.exceptions import ChannelDeliveryError

logger = logging.getLogger(__name__)


class TwilioSmsSender:
    channel = NotificationChannel.SMS

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        *,
        client: Client | None = None,
    ) -> None:
        self._from_number = from_number
        self._client = client or Client(account_sid, auth_token)

    def send(self, recipient: str, message: RenderedMessage) -> None:
        try:
            result = self._client.messages.create(
                body=message.body,
                from_=self._from_number,
                to=recipient,
            )
        except TwilioException as exc:
            logger.error("Twilio rejected SMS to %s: %s", recipient, exc)
            raise ChannelDeliveryError(f"Twilio error: {exc}", channel=self.channel.value) from exc

        error_code = getattr(result, "error_code", None)
        if error_code:
            error_message = getattr(result, "error_message", None) or "no details"
            raise ChannelDeliveryError(
                f"Twilio error {error_code}: {error_message}", channel=self.channel.value
            )
        logger.debug("Twilio queued SMS %s to %s", getattr(result, "sid", None), recipient)

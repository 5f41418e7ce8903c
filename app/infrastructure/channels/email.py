"""Deliver release emails through the SendGrid REST API."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.domain.entities import NotificationChannel, RenderedMessage
from app.domain.exceptions import ChannelDeliveryError

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{message} (field: {field})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, body: Any) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"SendGrid responded with status {status_code}: {details}"
    if status_code:
        return f"SendGrid responded with status {status_code}"
    if details:
        return f"SendGrid request failed: {details}"
    return "SendGrid request failed"


class SendGridEmailSender:
    """Send plain text release emails from the configured sender address."""

    channel = NotificationChannel.EMAIL

    def __init__(
        self,
        api_key: str,
        sender: str,
        *,
        client: SendGridAPIClient | None = None,
    ) -> None:
        self._sender = sender
        self._client = client or SendGridAPIClient(api_key)

    def send(self, recipient: str, message: RenderedMessage) -> None:
        mail = Mail(
            from_email=self._sender,
            to_emails=recipient,
            subject=message.subject,
            plain_text_content=message.body,
        )

        try:
            response = self._client.send(mail)
        except Exception as exc:
            description = _describe_failure(
                getattr(exc, "status_code", None), getattr(exc, "body", None)
            )
            if description == "SendGrid request failed":
                description = f"SendGrid request failed: {exc}"
            logger.error("Error sending email to %s: %s", recipient, description)
            raise ChannelDeliveryError(description, channel=self.channel.value) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            description = _describe_failure(status_code, getattr(response, "body", None))
            logger.error("Error sending email to %s: %s", recipient, description)
            raise ChannelDeliveryError(description, channel=self.channel.value)

        logger.debug("SendGrid accepted email to %s with status %s", recipient, status_code)

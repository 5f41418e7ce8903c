"""Deliver push notifications through an ntfy-compatible HTTP gateway.

Every subscriber gets a topic derived from their email address, so a
device only has to subscribe to ``<prefix>-<email slug>`` to receive alerts.
"""

from __future__ import annotations

import logging
import re

import httpx

from app.domain.entities import NotificationChannel, RenderedMessage
from app.domain.exceptions import ChannelDeliveryError

logger = logging.getLogger(__name__)

_TOPIC_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def topic_for(prefix: str, recipient: str) -> str:
    slug = _TOPIC_UNSAFE.sub("-", recipient.lower()).strip("-")
    if not slug:
        raise ChannelDeliveryError("Cannot derive a push topic from an empty recipient")
    return f"{prefix}-{slug}" if prefix else slug


class HttpPushSender:
    channel = NotificationChannel.PUSH

    def __init__(
        self,
        gateway_url: str,
        *,
        access_token: str | None = None,
        topic_prefix: str = "watch-notify",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._gateway_url = gateway_url.rstrip("/")
        self._topic_prefix = topic_prefix
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
        self._client = client or httpx.Client(timeout=timeout, headers=headers)

    def send(self, recipient: str, message: RenderedMessage) -> None:
        payload = {
            "topic": topic_for(self._topic_prefix, recipient),
            "title": message.subject,
            "message": message.body,
        }
        try:
            response = self._client.post(self._gateway_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.error("Push gateway responded with status %s for %s", status_code, recipient)
            raise ChannelDeliveryError(
                f"Push gateway responded with status {status_code}", channel=self.channel.value
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Push gateway request failed for %s: %s", recipient, exc)
            raise ChannelDeliveryError(
                f"Push gateway request failed: {exc}", channel=self.channel.value
            ) from exc

    def close(self) -> None:
        self._client.close()

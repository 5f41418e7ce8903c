"""Render channel-specific notification content for a release."""

from __future__ import annotations

from app.domain.entities import NotificationChannel, RenderedMessage, User, WatchRelease
from app.domain.exceptions import ChannelDeliveryError

EMAIL_SUBJECT_PREFIX = "New Watch Release: "
SHORT_SUBJECT = "New Watch Release"
EMAIL_SIGNATURE = "Best regards,\nWatch Notification Service"


def _price_label(release: WatchRelease) -> str | None:
    if release.price is None:
        return None
    return f"{release.currency} {release.price}"


def _single_line(text: str) -> str:
    return " ".join(text.split())


def render_email(
    release: WatchRelease, user: User, custom_message: str | None = None
) -> RenderedMessage:
    lines = [f"Dear {user.first_name},", ""]
    if custom_message and custom_message.strip():
        lines.extend([custom_message, ""])
    lines.extend(
        [
            "We're excited to announce a new watch release!",
            "",
            f"Watch: {release.name}",
            f"Brand: {release.brand}",
        ]
    )
    if release.model_number:
        lines.append(f"Model: {release.model_number}")
    price = _price_label(release)
    if price:
        lines.append(f"Price: {price}")
    if release.description:
        lines.append(f"Description: {release.description}")
    if release.product_url:
        lines.append(f"Learn more: {release.product_url}")
    body = "\n".join(lines) + "\n\n" + EMAIL_SIGNATURE
    return RenderedMessage(subject=EMAIL_SUBJECT_PREFIX + release.name, body=body)


def render_sms(
    release: WatchRelease, user: User, custom_message: str | None = None
) -> RenderedMessage:
    """SMS bodies stay on one line; embedded line breaks become spaces."""

    body = f"New watch release: {release.name} by {release.brand}"
    price = _price_label(release)
    if price:
        body += f" - {price}"
    if custom_message and custom_message.strip():
        body += f" - {custom_message}"
    return RenderedMessage(subject=SHORT_SUBJECT, body=_single_line(body))


def render_push(
    release: WatchRelease, user: User, custom_message: str | None = None
) -> RenderedMessage:
    # Push bodies never carry the custom message.
    body = f"New {release.brand} watch: {release.name} is now available!"
    return RenderedMessage(subject=SHORT_SUBJECT, body=body)


_RENDERERS = {
    NotificationChannel.EMAIL: render_email,
    NotificationChannel.SMS: render_sms,
    NotificationChannel.PUSH: render_push,
}


def render_message(
    channel: NotificationChannel,
    release: WatchRelease,
    user: User,
    custom_message: str | None = None,
) -> RenderedMessage:
    return _RENDERERS[channel](release, user, custom_message)


def render_test_message(channel: NotificationChannel) -> RenderedMessage:
    """Return the canned message used to check a channel's configuration."""

    if channel is NotificationChannel.EMAIL:
        body = (
            "This is a test email from the watch release notification service.\n\n"
            + EMAIL_SIGNATURE
        )
        return RenderedMessage(subject="Test Notification", body=body)
    if channel is NotificationChannel.SMS:
        return RenderedMessage(
            subject=SHORT_SUBJECT, body="Watch Notification Service: this is a test SMS."
        )
    return RenderedMessage(subject=SHORT_SUBJECT, body="This is a test push notification.")


def resolve_recipient(channel: NotificationChannel, user: User) -> str:
    """Return the address a message for ``channel`` is delivered to.

    Push notifications are keyed on the account email.
    """

    if channel is NotificationChannel.SMS:
        address = (user.phone_number or "").strip()
    else:
        address = (user.email or "").strip()
    if not address:
        raise ChannelDeliveryError(
            f"User {user.id} has no address for {channel.value}", channel=channel.value
        )
    return address


__all__ = [
    "render_email",
    "render_message",
    "render_push",
    "render_sms",
    "render_test_message",
    "resolve_recipient",
]

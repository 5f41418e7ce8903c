"""Errors raised by the notification domain."""


class NotFoundError(ValueError):
    """A release or user identifier did not resolve to a record."""


class ValidationError(ValueError):
    """A request was malformed and was rejected before touching any store."""


class DuplicateEmailError(ValidationError):
    """Another subscriber already uses the given email address."""


class ChannelDeliveryError(RuntimeError):
    """A channel transport could not deliver a message."""

    def __init__(self, message: str, *, channel: str | None = None) -> None:
        super().__init__(message)
        self.channel = channel


__all__ = [
    "ChannelDeliveryError",
    "DuplicateEmailError",
    "NotFoundError",
    "ValidationError",
]

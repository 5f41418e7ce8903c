"""Domain entities exposed by the application."""

from .dispatch import DispatchOutcome, DispatchRequest, RenderedMessage
from .notification import NotificationAttempt, NotificationChannel, NotificationStatus
from .release import WatchRelease
from .user import User

__all__ = [
    "DispatchOutcome",
    "DispatchRequest",
    "NotificationAttempt",
    "NotificationChannel",
    "NotificationStatus",
    "RenderedMessage",
    "User",
    "WatchRelease",
]

from .notification import (
    DispatchOutcomeRead,
    DispatchRequestIn,
    NotificationAttemptRead,
    NotificationCountRead,
    ChannelCheckRead,
)
from .release import WatchReleaseCreate, WatchReleaseRead, WatchReleaseUpdate
from .user import UserCreate, UserRead, UserUpdate

__all__ = [
    "DispatchOutcomeRead",
    "DispatchRequestIn",
    "NotificationAttemptRead",
    "NotificationCountRead",
    "ChannelCheckRead",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "WatchReleaseCreate",
    "WatchReleaseRead",
    "WatchReleaseUpdate",
]

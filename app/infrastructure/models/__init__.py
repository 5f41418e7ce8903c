"""ORM models used by the application infrastructure."""

from .notification import NotificationAttemptModel
from .release import WatchReleaseCategoryModel, WatchReleaseFeatureModel, WatchReleaseModel
from .user import UserModel, UserPreferenceModel

__all__ = [
    "NotificationAttemptModel",
    "UserModel",
    "UserPreferenceModel",
    "WatchReleaseCategoryModel",
    "WatchReleaseFeatureModel",
    "WatchReleaseModel",
]

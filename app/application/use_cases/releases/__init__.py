"""Use cases for managing watch releases."""

from .create_release import create_release
from .delete_release import delete_release
from .get_release import get_release
from .list_releases import (
    list_limited_edition_releases,
    list_releases,
    list_releases_by_brands,
    list_releases_by_date_range,
    list_unnotified_releases,
    list_upcoming_releases,
)
from .mark_release_notified import mark_release_notified
from .update_release import update_release

__all__ = [
    "create_release",
    "delete_release",
    "get_release",
    "list_limited_edition_releases",
    "list_releases",
    "list_releases_by_brands",
    "list_releases_by_date_range",
    "list_unnotified_releases",
    "list_upcoming_releases",
    "mark_release_notified",
    "update_release",
]

"""Use cases for managing users."""

from .create_user import create_user
from .delete_user import delete_user
from .get_user import get_user, get_user_by_email
from .list_users import (
    list_active_users,
    list_users,
    list_users_by_channel,
    list_users_by_preferences,
)
from .update_user import update_user

__all__ = [
    "create_user",
    "delete_user",
    "get_user",
    "get_user_by_email",
    "list_active_users",
    "list_users",
    "list_users_by_channel",
    "list_users_by_preferences",
    "update_user",
]

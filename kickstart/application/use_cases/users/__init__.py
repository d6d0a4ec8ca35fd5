"""Use cases for managing users."""

from .create_user import create_user
from .delete_user import delete_user
from .get_user import get_user, get_user_by_username
from .list_users import list_users, search_users
from .update_user import update_user

__all__ = [
    "create_user",
    "delete_user",
    "get_user",
    "get_user_by_username",
    "list_users",
    "search_users",
    "update_user",
]

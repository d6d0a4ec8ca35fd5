"""Aggregate application use cases."""

from .errors import EntityNotFoundError
from .users import create_user, get_user, list_users

__all__ = [
    "EntityNotFoundError",
    "create_user",
    "get_user",
    "list_users",
]

"""Use cases for retrieving a single user."""

from sqlalchemy.orm import Session

from kickstart.domain.entities import User
from kickstart.infrastructure.repositories import UserRepository

from ..errors import EntityNotFoundError


def get_user(session: Session, user_id: int) -> User:
    """Return the requested user or raise an error if it does not exist."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise EntityNotFoundError("User not found")
    return user


def get_user_by_username(session: Session, username: str) -> User:
    """Return the user registered as ``username``."""

    user = UserRepository(session).get_by_username(username.strip())
    if user is None:
        raise EntityNotFoundError("User not found")
    return user

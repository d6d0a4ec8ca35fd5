"""Use cases for listing and searching users."""

from sqlalchemy.orm import Session

from kickstart.domain.entities import User
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure.repositories import UserRepository


def list_users(session: Session, page_request: PageRequest) -> Page[User]:
    """Return a page of users."""

    return UserRepository(session).list(page_request)


def search_users(session: Session, query: str, page_request: PageRequest) -> Page[User]:
    """Return users whose names or username contain ``query``."""

    return UserRepository(session).search(query, page_request)

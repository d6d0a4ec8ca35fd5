"""Use case for creating users."""

from sqlalchemy.orm import Session

from kickstart.domain.entities import ACTION_USER_CREATED, User
from kickstart.infrastructure.repositories import UserRepository

from ..audit_logs import record_audit_event
from .validators import normalize_email, normalize_name, normalize_username


def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    first_name: str,
    last_name: str,
    created_by: int | None = None,
) -> User:
    """Create a new user ensuring unique usernames and email addresses."""

    repository = UserRepository(session)

    username = normalize_username(username)
    email = normalize_email(email)
    if repository.get_by_username(username):
        raise ValueError("Username is already taken")
    if repository.get_by_email(email):
        raise ValueError("Email address is already registered")

    user = User(
        id=None,
        username=username,
        email=email,
        first_name=normalize_name(first_name, "First name"),
        last_name=normalize_name(last_name, "Last name"),
    )
    created = repository.create(user, auditor_id=created_by)

    record_audit_event(
        session,
        action=ACTION_USER_CREATED,
        entity_type="User",
        entity_id=created.id,
        user_id=created_by,
        details=f"username={created.username}",
    )
    return created

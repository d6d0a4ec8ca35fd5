"""Use case for updating user information."""

from dataclasses import replace

from sqlalchemy.orm import Session

from kickstart.domain.entities import ACTION_USER_UPDATED, User
from kickstart.infrastructure.repositories import UserRepository

from ..audit_logs import record_audit_event
from ..errors import EntityNotFoundError
from .validators import normalize_email, normalize_name, normalize_username


def update_user(
    session: Session,
    *,
    user_id: int,
    username: str | None = None,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    updated_by: int | None = None,
) -> User:
    """Update the provided user with the new values."""

    repository = UserRepository(session)
    current_user = repository.get(user_id)
    if current_user is None:
        raise EntityNotFoundError("User not found")

    changes: dict[str, str] = {}

    if username is not None:
        username = normalize_username(username)
        if username != current_user.username:
            existing = repository.get_by_username(username)
            if existing and existing.id != user_id:
                raise ValueError("Username is already taken")
            changes["username"] = username

    if email is not None:
        email = normalize_email(email)
        if email != current_user.email:
            existing = repository.get_by_email(email)
            if existing and existing.id != user_id:
                raise ValueError("Email address is already registered")
            changes["email"] = email

    if first_name is not None:
        changes["first_name"] = normalize_name(first_name, "First name")
    if last_name is not None:
        changes["last_name"] = normalize_name(last_name, "Last name")

    if not changes:
        return current_user

    updated = repository.update(replace(current_user, **changes), auditor_id=updated_by)

    record_audit_event(
        session,
        action=ACTION_USER_UPDATED,
        entity_type="User",
        entity_id=updated.id,
        user_id=updated_by,
        details=", ".join(sorted(changes)),
    )
    return updated

"""Use case for deleting a user."""

from sqlalchemy.orm import Session

from kickstart.domain.entities import ACTION_USER_DELETED
from kickstart.infrastructure.repositories import UserRepository

from ..audit_logs import record_audit_event
from ..errors import EntityNotFoundError


def delete_user(session: Session, user_id: int, *, deleted_by: int | None = None) -> None:
    """Delete the specified user from the system."""

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None or not repository.delete(user_id):
        raise EntityNotFoundError("User not found")

    record_audit_event(
        session,
        action=ACTION_USER_DELETED,
        entity_type="User",
        entity_id=user_id,
        user_id=deleted_by,
        details=f"username={user.username}",
    )

"""Routes for managing users."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from kickstart.application.use_cases.emails import queue_email as queue_email_uc
from kickstart.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    get_user_by_username as get_user_by_username_uc,
    list_users as list_users_uc,
    search_users as search_users_uc,
    update_user as update_user_uc,
)
from kickstart.domain.entities import EmailStatus, EmailType, User
from kickstart.domain.pagination import PageRequest
from kickstart.infrastructure.database import get_db
from kickstart.infrastructure.email import build_welcome_email
from kickstart.interfaces.api.dependencies import get_current_auditor, get_page_request
from kickstart.interfaces.api.routes_helpers import http_error_from
from kickstart.interfaces.api.schemas import (
    PageRead,
    UserCreate,
    UserRead,
    UserUpdate,
    to_page_read,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        display_name=user.display_name,
        created_at=user.created_at,
        updated_at=user.updated_at,
        created_by=user.created_by,
        updated_by=user.updated_by,
        age_in_days=user.get_age_in_days(),
        modified_recently=user.is_modified_recently(),
        modified_after_creation=user.was_modified_after_creation(),
    )


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    auditor_id: int | None = Depends(get_current_auditor),
) -> UserRead:
    """Create a new user and greet them by email."""

    try:
        user = create_user_uc(
            db,
            username=user_in.username,
            email=user_in.email,
            first_name=user_in.first_name,
            last_name=user_in.last_name,
            created_by=auditor_id,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc

    if user_in.send_welcome_email:
        subject, html_content = build_welcome_email(user.first_name, user.username)
        notification = queue_email_uc(
            db,
            recipient=user.email,
            subject=subject,
            content=html_content,
            email_type=EmailType.WELCOME,
            send_now=True,
        )
        if notification.status is not EmailStatus.SENT:
            logger.warning("Welcome email for user %s was not delivered", user.username)

    return _to_read_model(user)


@router.get("/", response_model=PageRead[UserRead])
def list_users(
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> PageRead[UserRead]:
    """Return a page of users, newest first unless ``sort`` says otherwise."""

    try:
        page = list_users_uc(db, page_request)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_page_read(page, _to_read_model)


@router.get("/search", response_model=PageRead[UserRead])
def search_users(
    query: str = Query(..., min_length=1, description="Text contained in a name or username"),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> PageRead[UserRead]:
    """Search users by first name, last name or username."""

    try:
        page = search_users_uc(db, query, page_request)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return to_page_read(page, _to_read_model)


@router.get("/by-username/{username}", response_model=UserRead)
def read_user_by_username(username: str, db: Session = Depends(get_db)) -> UserRead:
    try:
        user = get_user_by_username_uc(db, username)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(user_id: int, db: Session = Depends(get_db)) -> UserRead:
    """Return the user identified by ``user_id``."""

    try:
        user = get_user_uc(db, user_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(user)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    auditor_id: int | None = Depends(get_current_auditor),
) -> UserRead:
    """Update the fields present in the payload."""

    update_data = user_in.model_dump(exclude_unset=True)
    try:
        user = update_user_uc(
            db,
            user_id=user_id,
            username=update_data.get("username"),
            email=update_data.get("email"),
            first_name=update_data.get("first_name"),
            last_name=update_data.get("last_name"),
            updated_by=auditor_id,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    auditor_id: int | None = Depends(get_current_auditor),
) -> Response:
    """Delete the user identified by ``user_id``."""

    try:
        delete_user_uc(db, user_id, deleted_by=auditor_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]

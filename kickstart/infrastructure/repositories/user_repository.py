"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kickstart.domain.entities import User
from kickstart.domain.pagination import Page, PageRequest
from kickstart.infrastructure.auditing import touch_for_create, touch_for_update
from kickstart.infrastructure.models import UserModel
from kickstart.utils import ensure_app_naive_datetime, ensure_app_timezone

from .paging import paginate

_SORTABLE = {
    "id": UserModel.id,
    "username": UserModel.username,
    "email": UserModel.email,
    "first_name": UserModel.first_name,
    "last_name": UserModel.last_name,
    "created_at": UserModel.created_at,
    "updated_at": UserModel.updated_at,
}


class UserRepository:
    """Provide CRUD, lookup and search operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, page_request: PageRequest) -> Page[User]:
        query = self.session.query(UserModel)
        return paginate(
            query, page_request, _SORTABLE, self._to_entity, tiebreaker=UserModel.id
        )

    def search(self, text: str, page_request: PageRequest) -> Page[User]:
        """Return users whose first name, last name or username contains ``text``."""

        needle = text.strip()
        query = self.session.query(UserModel)
        if needle:
            query = query.filter(
                or_(
                    UserModel.first_name.icontains(needle, autoescape=True),
                    UserModel.last_name.icontains(needle, autoescape=True),
                    UserModel.username.icontains(needle, autoescape=True),
                )
            )
        return paginate(
            query, page_request, _SORTABLE, self._to_entity, tiebreaker=UserModel.id
        )

    def list_recent(self, since: datetime) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.created_at >= ensure_app_naive_datetime(since))
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count_created_between(self, start: datetime, end: datetime) -> int:
        """Count users created in the half-open interval ``[start, end)``."""

        return (
            self.session.query(func.count(UserModel.id))
            .filter(UserModel.created_at >= ensure_app_naive_datetime(start))
            .filter(UserModel.created_at < ensure_app_naive_datetime(end))
            .scalar()
            or 0
        )

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = self._get_model(username=username)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def create(self, user: User, *, auditor_id: int | None = None) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        touch_for_create(model, auditor_id)
        self.session.add(model)
        self._commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User, *, auditor_id: int | None = None) -> User:
        model = self.session.get(UserModel, user.id) if user.id is not None else None
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        touch_for_update(model, auditor_id)
        self.session.add(model)
        self._commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, user_id: int) -> bool:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            # A concurrent writer claimed the username or email after the lookup.
            self.session.rollback()
            raise ValueError("Username or email address is already registered") from exc

    def _get_model(self, **filters) -> UserModel | None:
        return self.session.query(UserModel).filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            created_by=model.created_by,
            updated_by=model.updated_by,
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.created_at = ensure_app_naive_datetime(user.created_at)
            model.created_by = user.created_by
        model.username = user.username
        model.email = user.email
        model.first_name = user.first_name
        model.last_name = user.last_name


__all__ = ["UserRepository"]

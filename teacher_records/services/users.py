"""User account operations."""
from __future__ import annotations

import logging

from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from teacher_records.db.models import User, UserRole
from teacher_records.schemas import UserCreate, UserUpdate

from .errors import RecordNotFoundError, RecordValidationError
from .repository import Page, PageRequest, SoftDeleteRepository, parse_id
from .validation import ensure_user_unique

LOGGER = logging.getLogger(__name__)


def _users(session: Session) -> SoftDeleteRepository[User]:
    return SoftDeleteRepository(session, User)


def list_users(session: Session, request: PageRequest, role: str | None = None) -> Page:
    criteria = []
    if role:
        try:
            criteria.append(User.role == UserRole(role.upper()))
        except ValueError as exc:
            raise RecordValidationError(
                "Invalid role",
                errors=[f"role must be one of {', '.join(item.value for item in UserRole)}"],
            ) from exc
    return _users(session).page(request, *criteria)


def get_user(session: Session, user_id: str) -> User:
    user = _users(session).get(parse_id(user_id))
    if user is None:
        raise RecordNotFoundError("User not found")
    return user


def create_user(session: Session, payload: UserCreate) -> User:
    ensure_user_unique(session, email=payload.email, identity=payload.identity)
    user = _users(session).add(User(**payload.model_dump()))
    LOGGER.info("Created user %s with role %s", user.id, user.role.value)
    return user


def update_user(session: Session, user_id: str, payload: UserUpdate) -> User:
    try:
        payload.ensure_any_field()
    except ValueError as exc:
        raise RecordValidationError(str(exc)) from exc

    user = get_user(session, user_id)
    changes = payload.model_dump(exclude_unset=True)
    required = [name for name, value in changes.items() if value is None]
    if required:
        raise RecordValidationError(
            "Invalid data", errors=[f"{to_camel(name)} cannot be empty" for name in required]
        )

    ensure_user_unique(
        session,
        email=changes.get("email"),
        identity=changes.get("identity"),
        exclude_id=user.id,
    )
    for name, value in changes.items():
        setattr(user, name, value)
    session.flush()
    LOGGER.info("Updated user %s (%s)", user.id, ", ".join(sorted(changes)))
    return user


def delete_user(session: Session, user_id: str) -> None:
    """Soft delete a user; a teacher record backed by it is left untouched."""
    _users(session).soft_delete(get_user(session, user_id))


__all__ = ["create_user", "delete_user", "get_user", "list_users", "update_user"]

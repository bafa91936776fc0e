"""Referential and uniqueness checks run before any write."""
from __future__ import annotations

from typing import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from teacher_records.db.models import Teacher, TeacherPosition, User, UserRole

from .errors import InvalidIdError, RecordValidationError
from .repository import SoftDeleteRepository, parse_id


def require_fields(**values: object) -> None:
    missing = [name for name, value in values.items() if value in (None, "")]
    if missing:
        raise RecordValidationError(
            f"Missing required fields ({', '.join(values)})",
            errors=[f"{name} is required" for name in missing],
        )


def resolve_teacher_user(session: Session, user_id: str) -> User:
    """Return the non-deleted TEACHER user backing a new teacher record."""
    try:
        user_id = parse_id(user_id)
    except InvalidIdError as exc:
        raise RecordValidationError("Invalid userId", errors=["userId is not a valid id"]) from exc

    user = SoftDeleteRepository(session, User).find_one(
        User.id == user_id, User.role == UserRole.TEACHER
    )
    if user is None:
        raise RecordValidationError(
            "User does not exist or is not a teacher",
            errors=["userId must reference a user with role TEACHER"],
        )
    return user


def ensure_not_already_teacher(session: Session, user_id: str) -> None:
    if SoftDeleteRepository(session, Teacher).exists(Teacher.user_id == user_id):
        raise RecordValidationError(
            "User is already a teacher", errors=["userId already backs a teacher"]
        )


def validate_position_ids(session: Session, position_ids: Sequence[str]) -> list[str]:
    """Return canonical ids after checking each names a non-deleted position.

    The number of distinct matches must equal the number of ids supplied, so
    a list that repeats an id is rejected along with one that names a
    missing position.
    """
    if not position_ids:
        return []

    try:
        canonical = [parse_id(position_id) for position_id in position_ids]
    except InvalidIdError as exc:
        raise RecordValidationError(
            "One or more positions do not exist",
            errors=["teacherPositionsId contains an invalid id"],
        ) from exc

    duplicates = sorted({pid for pid in canonical if canonical.count(pid) > 1})
    if duplicates:
        raise RecordValidationError(
            "Duplicate positions supplied",
            errors=[f"position {pid} is listed more than once" for pid in duplicates],
        )

    matched = SoftDeleteRepository(session, TeacherPosition).count(TeacherPosition.id.in_(canonical))
    if matched != len(canonical):
        found = SoftDeleteRepository(session, TeacherPosition).find_many(canonical)
        raise RecordValidationError(
            "One or more positions do not exist",
            errors=[f"position {pid} does not exist" for pid in canonical if pid not in found],
        )
    return canonical


def ensure_user_unique(
    session: Session,
    *,
    email: str | None,
    identity: str | None,
    exclude_id: str | None = None,
) -> None:
    """Email and identity are each unique among non-deleted users."""
    users = SoftDeleteRepository(session, User)
    others = [User.id != exclude_id] if exclude_id else []

    if email is not None and users.exists(User.email == email, *others):
        raise RecordValidationError("Email already exists", errors=["email already exists"])
    if identity is not None and users.exists(User.identity == identity, *others):
        raise RecordValidationError(
            "Identity number already exists", errors=["identity already exists"]
        )


def ensure_position_unique(session: Session, *, name: str, code: str | None) -> None:
    """Neither the name nor the code may be held by a non-deleted position."""
    clauses = [TeacherPosition.name == name]
    if code is not None:
        clauses.append(TeacherPosition.code == code)

    existing = SoftDeleteRepository(session, TeacherPosition).find_one(or_(*clauses))
    if existing is None:
        return
    if existing.name == name:
        raise RecordValidationError("Position name already exists", errors=["name already exists"])
    raise RecordValidationError("Position code already exists", errors=["code already exists"])


def ensure_position_name_free(session: Session, name: str, exclude_id: str) -> None:
    if SoftDeleteRepository(session, TeacherPosition).exists(
        TeacherPosition.name == name, TeacherPosition.id != exclude_id
    ):
        raise RecordValidationError("Position name already exists", errors=["name already exists"])


__all__ = [
    "ensure_not_already_teacher",
    "ensure_position_name_free",
    "ensure_position_unique",
    "ensure_user_unique",
    "require_fields",
    "resolve_teacher_user",
    "validate_position_ids",
]

"""Teacher position operations."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from teacher_records.db.models import TeacherPosition
from teacher_records.schemas import PositionCreate, PositionUpdate

from .codes import CodePolicy, insert_with_unique_code
from .errors import RecordNotFoundError, RecordValidationError
from .repository import SoftDeleteRepository, parse_id
from .validation import ensure_position_name_free, ensure_position_unique

LOGGER = logging.getLogger(__name__)


def _positions(session: Session) -> SoftDeleteRepository[TeacherPosition]:
    return SoftDeleteRepository(session, TeacherPosition)


def list_positions(session: Session) -> Sequence[TeacherPosition]:
    return _positions(session).list_all()


def get_position(session: Session, position_id: str) -> TeacherPosition:
    position = _positions(session).get(parse_id(position_id))
    if position is None:
        raise RecordNotFoundError("Position not found")
    return position


def create_position(
    session: Session, payload: PositionCreate, code_policy: CodePolicy
) -> TeacherPosition:
    """Create a position, generating its code when the caller gave none."""
    ensure_position_unique(session, name=payload.name, code=payload.code)

    def build(code: str) -> TeacherPosition:
        return TeacherPosition(
            code=code,
            name=payload.name,
            description=payload.description,
            is_active=payload.is_active,
        )

    positions = _positions(session)
    if payload.code is not None:
        position = positions.add(build(payload.code))
    else:
        position = insert_with_unique_code(positions, code_policy, build)
    LOGGER.info("Created position %s (%s)", position.id, position.code)
    return position


def update_position(session: Session, position_id: str, payload: PositionUpdate) -> TeacherPosition:
    try:
        payload.ensure_any_field()
    except ValueError as exc:
        raise RecordValidationError(str(exc)) from exc

    position = get_position(session, position_id)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes:
        if changes["name"] is None:
            raise RecordValidationError("Invalid data", errors=["name cannot be empty"])
        if changes["name"] != position.name:
            ensure_position_name_free(session, changes["name"], exclude_id=position.id)
    if changes.get("is_active", True) is None:
        changes.pop("is_active")

    for name, value in changes.items():
        setattr(position, name, value)
    session.flush()
    LOGGER.info("Updated position %s", position.id)
    return position


def delete_position(session: Session, position_id: str) -> None:
    """Soft delete a position; teachers keep their reference to it."""
    _positions(session).soft_delete(get_position(session, position_id))


__all__ = [
    "create_position",
    "delete_position",
    "get_position",
    "list_positions",
    "update_position",
]

"""Teacher creation workflow and joined read views.

Creating a teacher runs in a fixed order and stops at the first failure:

1. ``userId`` and ``startDate`` are present;
2. the user exists, is not deleted and has the TEACHER role;
3. the user does not already back a non-deleted teacher;
4. every referenced position exists and is not deleted;
5. a unique teacher code is generated;
6. the teacher, its position links and degrees are written;
7. the stored teacher is read back joined with its user and positions.

Nothing is written before step 6. The "one teacher per user" rule is checked
here only; two concurrent requests for the same user can both pass step 3.

Reads join users and positions from their own tables, skipping soft-deleted
rows: a missing user becomes ``None`` and a missing position becomes a
``None`` entry at its place in the list.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from sqlalchemy.orm import Session, selectinload

from teacher_records.db.models import (
    Degree,
    Teacher,
    TeacherPosition,
    TeacherPositionLink,
    User,
    UserRole,
)
from teacher_records.db.models.mixins import utcnow
from teacher_records.schemas import (
    DegreeData,
    PositionSummary,
    TeacherCreate,
    TeacherRead,
    TeacherUpdate,
    TeacherWithUserCreate,
    UserSummary,
)

from .codes import CodePolicy, insert_with_unique_code
from .errors import RecordNotFoundError, RecordValidationError
from .repository import Page, PageRequest, SoftDeleteRepository, parse_id
from .users import create_user
from .validation import (
    ensure_not_already_teacher,
    require_fields,
    resolve_teacher_user,
    validate_position_ids,
)

LOGGER = logging.getLogger(__name__)

_EAGER = (selectinload(Teacher.position_links), selectinload(Teacher.degrees))


def _teachers(session: Session) -> SoftDeleteRepository[Teacher]:
    return SoftDeleteRepository(session, Teacher)


def _position_links(position_ids: Iterable[str]) -> list[TeacherPositionLink]:
    return [
        TeacherPositionLink(position_id=position_id, sequence=index)
        for index, position_id in enumerate(position_ids)
    ]


def _degrees(degrees: Iterable[DegreeData]) -> list[Degree]:
    return [Degree(sequence=index, **degree.model_dump()) for index, degree in enumerate(degrees)]


# ---------------------------------------------------------------------------
# Read assembly
# ---------------------------------------------------------------------------


def assemble(session: Session, teachers: Sequence[Teacher]) -> list[TeacherRead]:
    """Join teachers with their non-deleted users and positions."""
    users = SoftDeleteRepository(session, User).find_many(t.user_id for t in teachers)
    positions = SoftDeleteRepository(session, TeacherPosition).find_many(
        position_id for t in teachers for position_id in t.position_ids
    )
    return [_teacher_view(teacher, users, positions) for teacher in teachers]


def _teacher_view(
    teacher: Teacher,
    users: dict[str, User],
    positions: dict[str, TeacherPosition],
) -> TeacherRead:
    user = users.get(teacher.user_id)
    return TeacherRead(
        id=teacher.id,
        code=teacher.code,
        user_id=teacher.user_id,
        user=UserSummary.model_validate(user) if user is not None else None,
        teacher_positions_id=teacher.position_ids,
        teacher_positions=[
            PositionSummary.model_validate(positions[pid]) if pid in positions else None
            for pid in teacher.position_ids
        ],
        degrees=[DegreeData.model_validate(degree) for degree in teacher.degrees],
        is_active=teacher.is_active,
        is_deleted=teacher.is_deleted,
        start_date=teacher.start_date,
        end_date=teacher.end_date,
        created_at=teacher.created_at,
        updated_at=teacher.updated_at,
    )


def list_teachers(session: Session, request: PageRequest) -> tuple[list[TeacherRead], Page]:
    page = _teachers(session).page(request, options=_EAGER)
    return assemble(session, page.items), page


def _load_teacher(session: Session, teacher_id: str) -> Teacher:
    teacher = _teachers(session).get(parse_id(teacher_id))
    if teacher is None:
        raise RecordNotFoundError("Teacher not found")
    return teacher


def get_teacher(session: Session, teacher_id: str) -> TeacherRead:
    return assemble(session, [_load_teacher(session, teacher_id)])[0]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_teacher(session: Session, payload: TeacherCreate, code_policy: CodePolicy) -> TeacherRead:
    require_fields(userId=payload.user_id, startDate=payload.start_date)
    user = resolve_teacher_user(session, payload.user_id)
    ensure_not_already_teacher(session, user.id)
    position_ids = validate_position_ids(session, payload.teacher_positions_id)

    def build(code: str) -> Teacher:
        return Teacher(
            user_id=user.id,
            code=code,
            start_date=payload.start_date,
            end_date=payload.end_date,
            position_links=_position_links(position_ids),
            degrees=_degrees(payload.degrees),
        )

    teacher = insert_with_unique_code(_teachers(session), code_policy, build)
    LOGGER.info("Created teacher %s (%s) for user %s", teacher.id, teacher.code, user.id)
    return get_teacher(session, teacher.id)


def create_teacher_with_user(
    session: Session, payload: TeacherWithUserCreate, code_policy: CodePolicy
) -> TeacherRead:
    """Create the backing user and its teacher record as one unit.

    Both writes share a savepoint, so a teacher failure also discards the
    user instead of leaving it without a teacher.
    """
    if payload.user.role != UserRole.TEACHER:
        raise RecordValidationError(
            "User role must be TEACHER", errors=["user.role must be TEACHER"]
        )

    with session.begin_nested():
        user = create_user(session, payload.user)
        teacher_payload = TeacherCreate(user_id=user.id, **payload.teacher.model_dump())
        return create_teacher(session, teacher_payload, code_policy)


def update_teacher(session: Session, teacher_id: str, payload: TeacherUpdate) -> TeacherRead:
    try:
        payload.ensure_any_field()
    except ValueError as exc:
        raise RecordValidationError(str(exc)) from exc

    teacher = _load_teacher(session, teacher_id)
    fields = payload.model_fields_set

    if "start_date" in fields and payload.start_date is None:
        raise RecordValidationError("Invalid data", errors=["startDate cannot be empty"])
    start_date = payload.start_date or teacher.start_date
    end_date = payload.end_date if "end_date" in fields else teacher.end_date
    if end_date is not None and end_date < start_date:
        raise RecordValidationError(
            "Invalid data", errors=["endDate must be on or after startDate"]
        )

    if payload.teacher_positions_id is not None:
        position_ids = validate_position_ids(session, payload.teacher_positions_id)
        teacher.position_links = _position_links(position_ids)
    if payload.degrees is not None:
        teacher.degrees = _degrees(payload.degrees)
    if payload.is_active is not None:
        teacher.is_active = payload.is_active
    teacher.start_date = start_date
    teacher.end_date = end_date
    teacher.updated_at = utcnow()

    session.flush()
    LOGGER.info("Updated teacher %s", teacher.id)
    return assemble(session, [teacher])[0]


def delete_teacher(session: Session, teacher_id: str) -> None:
    _teachers(session).soft_delete(_load_teacher(session, teacher_id))


__all__ = [
    "assemble",
    "create_teacher",
    "create_teacher_with_user",
    "delete_teacher",
    "get_teacher",
    "list_teachers",
    "update_teacher",
]

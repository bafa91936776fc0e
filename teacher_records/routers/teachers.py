"""Teacher endpoints backed by the creation workflow and joined reads."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_teacher_code_policy
from ..schemas import TeacherCreate, TeacherUpdate, TeacherWithUserCreate, envelope
from ..services import PageRequest, RandomDigitCode
from ..services import teachers as teacher_service

router = APIRouter(prefix="/api/teachers", tags=["teachers"])


@router.get("")
def list_teachers(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> dict:
    teachers, result = teacher_service.list_teachers(db, PageRequest.build(page, limit))
    return envelope(teachers, pagination=result.metadata())


@router.post("", status_code=status.HTTP_201_CREATED)
def create_teacher(
    payload: TeacherCreate,
    db: Session = Depends(get_db),
    code_policy: RandomDigitCode = Depends(get_teacher_code_policy),
) -> dict:
    teacher = teacher_service.create_teacher(db, payload, code_policy)
    return envelope(teacher, message="Teacher created")


@router.post("/with-user", status_code=status.HTTP_201_CREATED)
def create_teacher_with_user(
    payload: TeacherWithUserCreate,
    db: Session = Depends(get_db),
    code_policy: RandomDigitCode = Depends(get_teacher_code_policy),
) -> dict:
    teacher = teacher_service.create_teacher_with_user(db, payload, code_policy)
    return envelope(teacher, message="Teacher created")


@router.get("/{teacher_id}")
def get_teacher(teacher_id: str, db: Session = Depends(get_db)) -> dict:
    return envelope(teacher_service.get_teacher(db, teacher_id))


@router.put("/{teacher_id}")
def update_teacher(
    teacher_id: str, payload: TeacherUpdate, db: Session = Depends(get_db)
) -> dict:
    teacher = teacher_service.update_teacher(db, teacher_id, payload)
    return envelope(teacher, message="Teacher updated")


@router.delete("/{teacher_id}")
def delete_teacher(teacher_id: str, db: Session = Depends(get_db)) -> dict:
    teacher_service.delete_teacher(db, teacher_id)
    return envelope(message="Teacher deleted")


__all__ = ["router"]

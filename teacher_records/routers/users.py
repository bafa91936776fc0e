"""User endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..schemas import UserCreate, UserRead, UserUpdate, envelope
from ..services import PageRequest
from ..services import users as user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("")
def list_users(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    role: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> dict:
    result = user_service.list_users(db, PageRequest.build(page, limit), role=role)
    return envelope(
        [UserRead.model_validate(user) for user in result.items],
        pagination=result.metadata(),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)) -> dict:
    user = user_service.create_user(db, payload)
    return envelope(UserRead.model_validate(user), message="User created")


@router.get("/{user_id}")
def get_user(user_id: str, db: Session = Depends(get_db)) -> dict:
    return envelope(UserRead.model_validate(user_service.get_user(db, user_id)))


@router.put("/{user_id}")
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)) -> dict:
    user = user_service.update_user(db, user_id, payload)
    return envelope(UserRead.model_validate(user), message="User updated")


@router.delete("/{user_id}")
def delete_user(user_id: str, db: Session = Depends(get_db)) -> dict:
    user_service.delete_user(db, user_id)
    return envelope(message="User deleted")


__all__ = ["router"]

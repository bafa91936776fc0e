"""Teacher position endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..dependencies import get_db, get_position_code_policy
from ..schemas import PositionCreate, PositionRead, PositionUpdate, envelope
from ..services import SequentialCode
from ..services import positions as position_service

router = APIRouter(prefix="/api/teacher-positions", tags=["teacher-positions"])


@router.get("")
def list_positions(db: Session = Depends(get_db)) -> dict:
    positions = position_service.list_positions(db)
    return envelope([PositionRead.model_validate(position) for position in positions])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_position(
    payload: PositionCreate,
    db: Session = Depends(get_db),
    code_policy: SequentialCode = Depends(get_position_code_policy),
) -> dict:
    position = position_service.create_position(db, payload, code_policy)
    return envelope(PositionRead.model_validate(position), message="Position created")


@router.get("/{position_id}")
def get_position(position_id: str, db: Session = Depends(get_db)) -> dict:
    return envelope(PositionRead.model_validate(position_service.get_position(db, position_id)))


@router.put("/{position_id}")
def update_position(
    position_id: str, payload: PositionUpdate, db: Session = Depends(get_db)
) -> dict:
    position = position_service.update_position(db, position_id, payload)
    return envelope(PositionRead.model_validate(position), message="Position updated")


@router.delete("/{position_id}")
def delete_position(position_id: str, db: Session = Depends(get_db)) -> dict:
    position_service.delete_position(db, position_id)
    return envelope(message="Position deleted")


__all__ = ["router"]

"""FastAPI dependencies for shared services."""
from __future__ import annotations

from typing import Iterator

from sqlalchemy.orm import Session

from .db import SessionLocal
from .services.codes import RandomDigitCode, SequentialCode


teacher_code_policy = RandomDigitCode(digits=10)
position_code_policy = SequentialCode(prefix="POS", width=3)


def get_db() -> Iterator[Session]:  # pragma: no cover - thin wrapper for dependency injection
    """Yield a session that commits on success and rolls back on error."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:  # noqa: BLE001 - propagate after rollback
        session.rollback()
        raise
    finally:
        session.close()


def get_teacher_code_policy() -> RandomDigitCode:
    """Return the code policy used for new teachers."""

    return teacher_code_policy


def get_position_code_policy() -> SequentialCode:
    """Return the code policy used for positions created without a code."""

    return position_code_policy

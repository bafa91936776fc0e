from __future__ import annotations

from datetime import date
from typing import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from teacher_records.db import Base, configure_sqlite
from teacher_records.db import models  # noqa: F401
from teacher_records.db.models import TeacherPosition, User, UserRole
from teacher_records.schemas import PositionCreate, UserCreate
from teacher_records.services.codes import SequentialCode
from teacher_records.services.positions import create_position
from teacher_records.services.users import create_user


@pytest.fixture()
def session() -> Iterator[Session]:
    engine = configure_sqlite(
        create_engine(
            "sqlite://",
            future=True,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
    with TestingSession() as session:
        yield session
        session.rollback()
    engine.dispose()


@pytest.fixture()
def make_user(session: Session):
    counter = iter(range(1, 10_000))

    def _make(role: UserRole = UserRole.TEACHER, **overrides) -> User:
        n = next(counter)
        fields = {
            "name": f"User {n}",
            "email": f"user{n}@school.edu",
            "phone_number": f"09000000{n:02d}",
            "address": f"{n} Campus Road",
            "identity": f"ID{n:08d}",
            "dob": date(1990, 1, 1),
            "role": role,
        }
        fields.update(overrides)
        return create_user(session, UserCreate(**fields))

    return _make


@pytest.fixture()
def make_position(session: Session):
    def _make(name: str, code: str | None = None) -> TeacherPosition:
        return create_position(
            session,
            PositionCreate(name=name, code=code, description=f"{name} duties"),
            SequentialCode(prefix="POS", width=3),
        )

    return _make

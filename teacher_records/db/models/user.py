"""User account model."""
from __future__ import annotations

import enum
from datetime import date

from sqlalchemy import Date, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from teacher_records.db import Base
from teacher_records.db.models.mixins import RecordMixin


class UserRole(str, enum.Enum):
    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    ADMIN = "ADMIN"


class User(RecordMixin, Base):
    """A person known to the institution; teachers are backed by one."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone_number: Mapped[str] = mapped_column(String(32), nullable=False)
    address: Mapped[str] = mapped_column(String(512), nullable=False)
    identity: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", native_enum=False, length=16), nullable=False, index=True
    )

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"User(id={self.id!r}, email={self.email!r}, role={self.role!r})"

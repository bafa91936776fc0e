"""Teacher position model."""
from __future__ import annotations

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from teacher_records.db import Base
from teacher_records.db.models.mixins import RecordMixin


class TeacherPosition(RecordMixin, Base):
    """A role a teacher can hold, such as lecturer or head of department."""

    __tablename__ = "teacher_positions"

    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"TeacherPosition(id={self.id!r}, code={self.code!r})"

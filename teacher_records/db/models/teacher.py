"""Teacher domain model."""
from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teacher_records.db import Base
from teacher_records.db.models.mixins import RecordMixin, new_id


class Teacher(RecordMixin, Base):
    """Employment record of a TEACHER user.

    ``user_id`` and the position links hold plain ids: integrity against the
    users and teacher_positions tables is checked when writing, not enforced
    by the database.
    """

    __tablename__ = "teachers"

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    position_links: Mapped[list["TeacherPositionLink"]] = relationship(
        "TeacherPositionLink",
        back_populates="teacher",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TeacherPositionLink.sequence",
    )
    degrees: Mapped[list["Degree"]] = relationship(
        "Degree",
        back_populates="teacher",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Degree.sequence",
    )

    @property
    def position_ids(self) -> list[str]:
        return [link.position_id for link in self.position_links]

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"Teacher(id={self.id!r}, code={self.code!r})"


class TeacherPositionLink(Base):
    """Ordered reference from a teacher to one of its positions."""

    __tablename__ = "teacher_position_links"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    teacher: Mapped["Teacher"] = relationship("Teacher", back_populates="position_links")

    def __repr__(self) -> str:  # pragma: no cover
        return f"TeacherPositionLink(teacher_id={self.teacher_id!r}, position_id={self.position_id!r})"

"""Degree model."""
from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teacher_records.db import Base
from teacher_records.db.models.mixins import new_id


class Degree(Base):
    """Academic qualification embedded in a teacher record."""

    __tablename__ = "degrees"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    school: Mapped[str] = mapped_column(String(255), nullable=False)
    major: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    is_graduated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    teacher: Mapped["Teacher"] = relationship("Teacher", back_populates="degrees")

    def __repr__(self) -> str:  # pragma: no cover
        return f"Degree(type={self.type!r}, school={self.school!r}, year={self.year!r})"

"""SQLAlchemy model package."""
from teacher_records.db.models.degree import Degree
from teacher_records.db.models.teacher import Teacher, TeacherPositionLink
from teacher_records.db.models.teacher_position import TeacherPosition
from teacher_records.db.models.user import User, UserRole

__all__ = [
    "Degree",
    "Teacher",
    "TeacherPosition",
    "TeacherPositionLink",
    "User",
    "UserRole",
]

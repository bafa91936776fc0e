"""Development fixture helpers."""
from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from teacher_records.db.models import TeacherPosition, User, UserRole
from teacher_records.schemas import DegreeData, PositionCreate, TeacherCreate, UserCreate
from teacher_records.services.codes import RandomDigitCode, SequentialCode
from teacher_records.services.positions import create_position
from teacher_records.services.repository import SoftDeleteRepository
from teacher_records.services.teachers import create_teacher
from teacher_records.services.users import create_user

DEMO_EMAIL = "demo.teacher@example.com"


def seed_dev_data(session: Session) -> None:
    """Populate the database with demo positions and one demo teacher."""
    positions = SoftDeleteRepository(session, TeacherPosition)
    if positions.count() == 0:
        for name, description in (
            ("Lecturer", "Teaches scheduled classes."),
            ("Head of Department", "Coordinates a subject department."),
            ("Homeroom Teacher", "Responsible for one class group."),
        ):
            create_position(
                session,
                PositionCreate(name=name, description=description),
                SequentialCode(prefix="POS", width=3),
            )

    users = SoftDeleteRepository(session, User)
    if users.exists(User.email == DEMO_EMAIL):
        return

    user = create_user(
        session,
        UserCreate(
            name="Demo Teacher",
            email=DEMO_EMAIL,
            phone_number="0900000000",
            address="1 School Road",
            identity="000000000001",
            dob=date(1985, 5, 17),
            role=UserRole.TEACHER,
        ),
    )
    lecturer = positions.find_one(TeacherPosition.name == "Lecturer")
    create_teacher(
        session,
        TeacherCreate(
            user_id=user.id,
            start_date=date(2020, 9, 1),
            teacher_positions_id=[lecturer.id] if lecturer is not None else [],
            degrees=[
                DegreeData(type="Bachelor", school="City University", major="Mathematics", year=2007),
                DegreeData(
                    type="Master",
                    school="City University",
                    major="Education",
                    year=2010,
                    is_graduated=True,
                ),
            ],
        ),
        RandomDigitCode(digits=10),
    )
    session.flush()

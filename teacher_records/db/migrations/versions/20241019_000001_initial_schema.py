"""Initial teacher records schema."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20241019_000001"
down_revision = None
branch_labels = None
depends_on = None


def _record_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _record_indexes(table: str) -> None:
    op.create_index(op.f(f"ix_{table}_is_deleted"), table, ["is_deleted"], unique=False)
    op.create_index(op.f(f"ix_{table}_created_at"), table, ["created_at"], unique=False)


def upgrade() -> None:
    op.create_table(
        "users",
        *_record_columns(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=32), nullable=False),
        sa.Column("address", sa.String(length=512), nullable=False),
        sa.Column("identity", sa.String(length=64), nullable=False),
        sa.Column("dob", sa.Date(), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    _record_indexes("users")
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_identity"), "users", ["identity"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)

    op.create_table(
        "teacher_positions",
        *_record_columns(),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
    )
    _record_indexes("teacher_positions")
    op.create_index(op.f("ix_teacher_positions_code"), "teacher_positions", ["code"], unique=True)
    op.create_index(op.f("ix_teacher_positions_name"), "teacher_positions", ["name"], unique=False)

    op.create_table(
        "teachers",
        *_record_columns(),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    _record_indexes("teachers")
    op.create_index(op.f("ix_teachers_code"), "teachers", ["code"], unique=True)
    op.create_index(op.f("ix_teachers_user_id"), "teachers", ["user_id"], unique=False)

    op.create_table(
        "teacher_position_links",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("teacher_id", sa.String(length=36), nullable=False),
        sa.Column("position_id", sa.String(length=36), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_teacher_position_links_teacher_id"), "teacher_position_links", ["teacher_id"]
    )
    op.create_index(
        op.f("ix_teacher_position_links_position_id"), "teacher_position_links", ["position_id"]
    )

    op.create_table(
        "degrees",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("teacher_id", sa.String(length=36), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("school", sa.String(length=255), nullable=False),
        sa.Column("major", sa.String(length=255), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("is_graduated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(["teacher_id"], ["teachers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_degrees_teacher_id"), "degrees", ["teacher_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_degrees_teacher_id"), table_name="degrees")
    op.drop_table("degrees")
    op.drop_index(op.f("ix_teacher_position_links_position_id"), table_name="teacher_position_links")
    op.drop_index(op.f("ix_teacher_position_links_teacher_id"), table_name="teacher_position_links")
    op.drop_table("teacher_position_links")
    for table in ("teachers", "teacher_positions", "users"):
        op.drop_table(table)

"""create faculty and timetable tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "faculty",
        sa.Column("faculty_id", sa.String(length=100), primary_key=True, nullable=False),
        sa.Column("faculty_name", sa.String(length=200), nullable=False),
        sa.Column("department", sa.String(length=200), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "timetables",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("department", sa.String(length=200), nullable=False),
        sa.Column("semester", sa.String(length=100), nullable=False),
        sa.Column("block", sa.String(length=100), nullable=False),
        sa.Column("classroom", sa.String(length=100), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        "timetable_slots",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "timetable_id",
            sa.String(length=36),
            sa.ForeignKey("timetables.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day", sa.String(length=20), nullable=False),
        sa.Column("slot_number", sa.Integer(), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=False),
        sa.Column("faculty_id", sa.String(length=100), nullable=False),
        sa.Column("course_code", sa.String(length=50), nullable=True),
    )
    op.create_index("ix_timetable_slots_timetable_id", "timetable_slots", ["timetable_id"])
    op.create_index(
        "ix_timetable_slots_day_slot_faculty",
        "timetable_slots",
        ["day", "slot_number", "faculty_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_timetable_slots_day_slot_faculty", table_name="timetable_slots")
    op.drop_index("ix_timetable_slots_timetable_id", table_name="timetable_slots")
    op.drop_table("timetable_slots")
    op.drop_table("timetables")
    op.drop_table("faculty")

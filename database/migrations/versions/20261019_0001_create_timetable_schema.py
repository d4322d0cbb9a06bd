"""create timetable schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

ROOM_TYPES = ("regular", "lab", "computer_lab", "physical_education", "library")
AVAILABILITY_STATES = ("available", "unavailable")


def _availability_table(name: str, entity_column: str, state_type) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(entity_column, sa.String(length=36), nullable=False),
        sa.Column("day_of_week", sa.String(length=10), nullable=False),
        sa.Column("period_id", sa.String(length=36), nullable=False),
        sa.Column("state", state_type, nullable=False),
        sa.UniqueConstraint(entity_column, "day_of_week", "period_id", name=f"uq_{name}_slot"),
    )
    op.create_index(f"ix_{name}_{entity_column}", name, [entity_column])


def upgrade() -> None:
    bind = op.get_bind()
    sa.Enum(*ROOM_TYPES, name="room_type").create(bind, checkfirst=True)
    sa.Enum(*AVAILABILITY_STATES, name="availability_state").create(bind, checkfirst=True)
    # Shared by several tables; created once above.
    room_type = postgresql.ENUM(*ROOM_TYPES, name="room_type", create_type=False)
    availability_state = postgresql.ENUM(*AVAILABILITY_STATES, name="availability_state", create_type=False)

    op.create_table(
        "periods",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("number", sa.Integer(), nullable=False, unique=True),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("is_break", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("label", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", room_type, nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="40"),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_rooms_name", "rooms", ["name"], unique=True)

    op.create_table(
        "teachers",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        "school_classes",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("grade", sa.Integer(), nullable=True),
        sa.Column("section", sa.String(length=20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        "subjects",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=True, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "timetable_lessons",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("subject_id", sa.String(length=36), nullable=True),
        sa.Column("title", sa.String(length=200), nullable=True),
        sa.Column("count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("length", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("room_type", room_type, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_timetable_lessons_subject_id", "timetable_lessons", ["subject_id"])

    for table, column in (("timetable_lesson_teachers", "teacher_id"), ("timetable_lesson_classes", "class_id")):
        short = column.split("_")[0]
        op.create_table(
            table,
            sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
            sa.Column("lesson_id", sa.String(length=36), nullable=False),
            sa.Column(column, sa.String(length=36), nullable=False),
            sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
            sa.UniqueConstraint("lesson_id", column, name=f"uq_{table}_lesson_{short}"),
        )
        op.create_index(f"ix_{table}_lesson_id", table, ["lesson_id"])

    _availability_table("teacher_availability", "teacher_id", availability_state)
    _availability_table("class_availability", "class_id", availability_state)
    _availability_table("subject_availability", "subject_id", availability_state)

    op.create_table(
        "timetable_slots",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("day_of_week", sa.String(length=10), nullable=False),
        sa.Column("period_id", sa.String(length=36), nullable=False),
        sa.Column("lesson_id", sa.String(length=36), nullable=False),
        sa.Column("subject_id", sa.String(length=36), nullable=True),
        sa.Column("room_id", sa.String(length=36), nullable=True),
        sa.Column("teacher_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    for column in ("day_of_week", "lesson_id", "room_id", "teacher_id"):
        op.create_index(f"ix_timetable_slots_{column}", "timetable_slots", [column])

    for table, column in (("timetable_slot_classes", "class_id"), ("timetable_slot_teachers", "teacher_id")):
        short = column.split("_")[0]
        op.create_table(
            table,
            sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
            sa.Column("slot_id", sa.String(length=36), nullable=False),
            sa.Column(column, sa.String(length=36), nullable=False),
            sa.UniqueConstraint("slot_id", column, name=f"uq_{table}_slot_{short}"),
        )
        op.create_index(f"ix_{table}_slot_id", table, ["slot_id"])
        op.create_index(f"ix_{table}_{column}", table, [column])


def downgrade() -> None:
    for table in (
        "timetable_slot_teachers",
        "timetable_slot_classes",
        "timetable_slots",
        "subject_availability",
        "class_availability",
        "teacher_availability",
        "timetable_lesson_classes",
        "timetable_lesson_teachers",
        "timetable_lessons",
        "subjects",
        "school_classes",
        "teachers",
        "rooms",
        "periods",
    ):
        op.drop_table(table)
    sa.Enum(name="availability_state").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="room_type").drop(op.get_bind(), checkfirst=True)

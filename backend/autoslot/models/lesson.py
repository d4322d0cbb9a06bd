import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum as SAEnum, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from autoslot.db.base import Base
from autoslot.models.room import RoomType


class TimetableLesson(Base):
    """Weekly requirement: a subject lesson, or a meeting when ``title`` is set instead of ``subject_id``."""

    __tablename__ = "timetable_lessons"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    subject_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    length: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    room_type: Mapped[RoomType | None] = mapped_column(SAEnum(RoomType, name="room_type"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class TimetableLessonTeacher(Base):
    __tablename__ = "timetable_lesson_teachers"
    __table_args__ = (
        UniqueConstraint("lesson_id", "teacher_id", name="uq_timetable_lesson_teachers_lesson_teacher"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lesson_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    teacher_id: Mapped[str] = mapped_column(String(36), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TimetableLessonClass(Base):
    __tablename__ = "timetable_lesson_classes"
    __table_args__ = (
        UniqueConstraint("lesson_id", "class_id", name="uq_timetable_lesson_classes_lesson_class"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    lesson_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    class_id: Mapped[str] = mapped_column(String(36), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

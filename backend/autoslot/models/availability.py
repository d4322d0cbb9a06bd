import uuid
from enum import Enum

from sqlalchemy import Enum as SAEnum, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from autoslot.db.base import Base


class AvailabilityState(str, Enum):
    available = "available"
    unavailable = "unavailable"


class TeacherAvailability(Base):
    __tablename__ = "teacher_availability"
    __table_args__ = (
        UniqueConstraint("teacher_id", "day_of_week", "period_id", name="uq_teacher_availability_slot"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    teacher_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)
    period_id: Mapped[str] = mapped_column(String(36), nullable=False)
    state: Mapped[AvailabilityState] = mapped_column(
        SAEnum(AvailabilityState, name="availability_state"),
        nullable=False,
        default=AvailabilityState.unavailable,
    )


class ClassAvailability(Base):
    __tablename__ = "class_availability"
    __table_args__ = (
        UniqueConstraint("class_id", "day_of_week", "period_id", name="uq_class_availability_slot"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    class_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)
    period_id: Mapped[str] = mapped_column(String(36), nullable=False)
    state: Mapped[AvailabilityState] = mapped_column(
        SAEnum(AvailabilityState, name="availability_state"),
        nullable=False,
        default=AvailabilityState.unavailable,
    )


class SubjectAvailability(Base):
    __tablename__ = "subject_availability"
    __table_args__ = (
        UniqueConstraint("subject_id", "day_of_week", "period_id", name="uq_subject_availability_slot"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    subject_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)
    period_id: Mapped[str] = mapped_column(String(36), nullable=False)
    state: Mapped[AvailabilityState] = mapped_column(
        SAEnum(AvailabilityState, name="availability_state"),
        nullable=False,
        default=AvailabilityState.unavailable,
    )

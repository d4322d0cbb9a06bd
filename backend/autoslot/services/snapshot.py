from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntityKind(str, Enum):
    teacher = "teacher"
    school_class = "class"
    subject = "subject"
    room = "room"


@dataclass(frozen=True)
class PeriodSlot:
    id: str
    number: int
    is_break: bool = False


@dataclass(frozen=True)
class RoomOption:
    id: str
    category: str
    capacity: int = 0
    name: str | None = None


@dataclass(frozen=True)
class LessonRequirement:
    id: str
    count: int
    length: int
    teacher_ids: tuple[str, ...]
    class_ids: tuple[str, ...] = ()
    subject_id: str | None = None
    subject_name: str | None = None
    title: str | None = None
    room_category: str | None = None
    teacher_names: tuple[str, ...] = ()
    class_names: tuple[str, ...] = ()

    @property
    def is_meeting(self) -> bool:
        return self.subject_id is None

    @property
    def label(self) -> str:
        return self.subject_name or self.title or self.subject_id or self.id

    @property
    def distribution_key(self) -> tuple[str, str]:
        if self.subject_id is not None:
            return ("subject", self.subject_id)
        return ("title", self.title or self.id)


@dataclass(frozen=True)
class UnavailabilityRecord:
    kind: EntityKind
    entity_id: str
    day: str
    period_id: str


@dataclass(frozen=True)
class Placement:
    day: str
    period_id: str
    period_number: int
    requirement_id: str
    subject_id: str | None
    room_id: str | None
    class_ids: tuple[str, ...]
    teacher_ids: tuple[str, ...]


@dataclass(frozen=True)
class SchedulingSnapshot:
    """Read-only inputs of one generation run.

    The ``known_*`` sets are optional; when given, requirements referencing ids
    outside them are rejected as inconsistent instead of being scheduled.
    """

    periods: tuple[PeriodSlot, ...]
    rooms: tuple[RoomOption, ...]
    requirements: tuple[LessonRequirement, ...]
    unavailability: tuple[UnavailabilityRecord, ...] = ()
    known_teacher_ids: frozenset[str] | None = None
    known_class_ids: frozenset[str] | None = None
    known_subject_ids: frozenset[str] | None = None


def allocatable_periods(periods: tuple[PeriodSlot, ...] | list[PeriodSlot]) -> list[PeriodSlot]:
    return sorted((period for period in periods if not period.is_break), key=lambda period: period.number)

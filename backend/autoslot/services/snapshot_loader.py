from __future__ import annotations

from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session

from autoslot.models.availability import (
    AvailabilityState,
    ClassAvailability,
    SubjectAvailability,
    TeacherAvailability,
)
from autoslot.models.lesson import TimetableLesson, TimetableLessonClass, TimetableLessonTeacher
from autoslot.models.period import Period
from autoslot.models.room import Room
from autoslot.models.school import SchoolClass, Subject, Teacher
from autoslot.services.snapshot import (
    EntityKind,
    LessonRequirement,
    PeriodSlot,
    RoomOption,
    UnavailabilityRecord,
)


def load_periods(db: Session) -> tuple[PeriodSlot, ...]:
    rows = db.execute(select(Period).where(Period.is_break.is_(False)).order_by(Period.number)).scalars().all()
    return tuple(PeriodSlot(id=row.id, number=row.number, is_break=row.is_break) for row in rows)


def load_rooms(db: Session) -> tuple[RoomOption, ...]:
    rows = db.execute(select(Room).order_by(Room.created_at, Room.name)).scalars().all()
    return tuple(
        RoomOption(id=row.id, category=row.type.value, capacity=row.capacity, name=row.name) for row in rows
    )


def load_reference_ids(db: Session) -> tuple[dict[str, str], dict[str, str], dict[str, str]]:
    teachers = {row.id: row.name for row in db.execute(select(Teacher)).scalars()}
    classes = {row.id: row.name for row in db.execute(select(SchoolClass)).scalars()}
    subjects = {row.id: row.name for row in db.execute(select(Subject)).scalars()}
    return teachers, classes, subjects


def load_requirements(
    db: Session,
    *,
    teacher_names: dict[str, str],
    class_names: dict[str, str],
    subject_names: dict[str, str],
) -> tuple[LessonRequirement, ...]:
    lessons = db.execute(select(TimetableLesson).order_by(TimetableLesson.created_at, TimetableLesson.id)).scalars().all()

    teachers_by_lesson: dict[str, list[str]] = defaultdict(list)
    teacher_links = db.execute(
        select(TimetableLessonTeacher).order_by(
            TimetableLessonTeacher.lesson_id,
            TimetableLessonTeacher.position,
            TimetableLessonTeacher.teacher_id,
        )
    ).scalars()
    for link in teacher_links:
        teachers_by_lesson[link.lesson_id].append(link.teacher_id)

    classes_by_lesson: dict[str, list[str]] = defaultdict(list)
    class_links = db.execute(
        select(TimetableLessonClass).order_by(
            TimetableLessonClass.lesson_id,
            TimetableLessonClass.position,
            TimetableLessonClass.class_id,
        )
    ).scalars()
    for link in class_links:
        classes_by_lesson[link.lesson_id].append(link.class_id)

    requirements: list[LessonRequirement] = []
    for lesson in lessons:
        teacher_ids = tuple(teachers_by_lesson.get(lesson.id, []))
        class_ids = tuple(classes_by_lesson.get(lesson.id, []))
        requirements.append(
            LessonRequirement(
                id=lesson.id,
                count=lesson.count,
                length=lesson.length,
                teacher_ids=teacher_ids,
                class_ids=class_ids,
                subject_id=lesson.subject_id,
                subject_name=subject_names.get(lesson.subject_id) if lesson.subject_id else None,
                title=lesson.title,
                room_category=lesson.room_type.value if lesson.room_type is not None else None,
                teacher_names=tuple(teacher_names.get(teacher_id, teacher_id) for teacher_id in teacher_ids),
                class_names=tuple(class_names.get(class_id, class_id) for class_id in class_ids),
            )
        )
    return tuple(requirements)


def load_unavailability(db: Session) -> tuple[UnavailabilityRecord, ...]:
    records: list[UnavailabilityRecord] = []
    sources = (
        (EntityKind.teacher, TeacherAvailability, TeacherAvailability.teacher_id),
        (EntityKind.school_class, ClassAvailability, ClassAvailability.class_id),
        (EntityKind.subject, SubjectAvailability, SubjectAvailability.subject_id),
    )
    for kind, model, entity_column in sources:
        rows = db.execute(
            select(entity_column, model.day_of_week, model.period_id).where(
                model.state == AvailabilityState.unavailable
            )
        ).all()
        for entity_id, day, period_id in rows:
            records.append(
                UnavailabilityRecord(kind=kind, entity_id=entity_id, day=day.strip().upper(), period_id=period_id)
            )
    return tuple(records)

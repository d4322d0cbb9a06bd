from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from autoslot.models.period import Period
from autoslot.models.timetable_slot import TimetableSlot, TimetableSlotClass, TimetableSlotTeacher
from autoslot.schemas.generator import DAY_ORDER
from autoslot.schemas.timetable import TimetableSlotOut
from autoslot.services.snapshot import Placement

logger = logging.getLogger(__name__)


def clear_timetable(db: Session) -> int:
    """Delete every persisted slot. Nothing is committed here."""
    db.execute(delete(TimetableSlotClass))
    db.execute(delete(TimetableSlotTeacher))
    result = db.execute(delete(TimetableSlot))
    removed = result.rowcount or 0
    logger.info("Cleared timetable slots=%s", removed)
    return removed


def persist_placements(db: Session, placements: Sequence[Placement]) -> int:
    """Stage slots plus class/teacher association rows for one batch commit by the caller."""
    rows: list[object] = []
    for placement in placements:
        slot_id = str(uuid.uuid4())
        rows.append(
            TimetableSlot(
                id=slot_id,
                day_of_week=placement.day,
                period_id=placement.period_id,
                lesson_id=placement.requirement_id,
                subject_id=placement.subject_id,
                room_id=placement.room_id,
                teacher_id=placement.teacher_ids[0],
            )
        )
        rows.extend(TimetableSlotClass(slot_id=slot_id, class_id=class_id) for class_id in placement.class_ids)
        rows.extend(
            TimetableSlotTeacher(slot_id=slot_id, teacher_id=teacher_id) for teacher_id in placement.teacher_ids
        )
    db.add_all(rows)
    db.flush()
    logger.info("Staged timetable rows slots=%s total_rows=%s", len(placements), len(rows))
    return len(placements)


def list_slots(
    db: Session,
    *,
    class_id: str | None = None,
    teacher_id: str | None = None,
    room_id: str | None = None,
) -> list[TimetableSlotOut]:
    query = select(TimetableSlot)
    if class_id is not None:
        query = query.where(
            TimetableSlot.id.in_(select(TimetableSlotClass.slot_id).where(TimetableSlotClass.class_id == class_id))
        )
    if teacher_id is not None:
        query = query.where(
            TimetableSlot.id.in_(
                select(TimetableSlotTeacher.slot_id).where(TimetableSlotTeacher.teacher_id == teacher_id)
            )
        )
    if room_id is not None:
        query = query.where(TimetableSlot.room_id == room_id)
    slots = db.execute(query).scalars().all()
    if not slots:
        return []

    slot_ids = [slot.id for slot in slots]
    classes_by_slot: dict[str, list[str]] = defaultdict(list)
    for slot_id, linked_class_id in db.execute(
        select(TimetableSlotClass.slot_id, TimetableSlotClass.class_id)
        .where(TimetableSlotClass.slot_id.in_(slot_ids))
        .order_by(TimetableSlotClass.class_id)
    ):
        classes_by_slot[slot_id].append(linked_class_id)
    teachers_by_slot: dict[str, list[str]] = defaultdict(list)
    for slot_id, linked_teacher_id in db.execute(
        select(TimetableSlotTeacher.slot_id, TimetableSlotTeacher.teacher_id)
        .where(TimetableSlotTeacher.slot_id.in_(slot_ids))
        .order_by(TimetableSlotTeacher.teacher_id)
    ):
        teachers_by_slot[slot_id].append(linked_teacher_id)
    period_numbers = dict(db.execute(select(Period.id, Period.number)).all())

    day_rank = {day: index for index, day in enumerate(DAY_ORDER)}
    ordered = sorted(
        slots,
        key=lambda slot: (
            day_rank.get(slot.day_of_week, len(DAY_ORDER)),
            period_numbers.get(slot.period_id, 0),
            slot.lesson_id,
            slot.id,
        ),
    )
    return [
        TimetableSlotOut(
            id=slot.id,
            day_of_week=slot.day_of_week,
            period_id=slot.period_id,
            period_number=period_numbers.get(slot.period_id),
            lesson_id=slot.lesson_id,
            subject_id=slot.subject_id,
            room_id=slot.room_id,
            teacher_id=slot.teacher_id,
            class_ids=classes_by_slot.get(slot.id, []),
            teacher_ids=teachers_by_slot.get(slot.id, []),
        )
        for slot in ordered
    ]

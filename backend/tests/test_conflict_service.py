import pytest

from autoslot.schemas.timetable import TimetableSlotOut
from autoslot.services.conflict_service import ConflictService


def slot(slot_id, *, day="MONDAY", period="p1", teacher="t1", classes=("c1",), room="r1", teachers=None):
    return TimetableSlotOut(
        id=slot_id,
        day_of_week=day,
        period_id=period,
        period_number=int(period[1:]),
        lesson_id=f"lesson-{slot_id}",
        subject_id="s1",
        room_id=room,
        teacher_id=teacher,
        class_ids=list(classes),
        teacher_ids=list(teachers if teachers is not None else [teacher]),
    )


@pytest.mark.parametrize(
    ("second", "expected_type", "entity"),
    [
        (slot("s2", classes=("c2",), room="r2"), "teacher_overlap", "t1"),
        (slot("s2", teacher="t2", room="r2"), "class_overlap", "c1"),
        (slot("s2", teacher="t2", classes=("c2",)), "room_overlap", "r1"),
    ],
)
def test_detects_single_overlap(second, expected_type, entity):
    report = ConflictService([slot("s1"), second]).detect_conflicts()

    assert report.count == 1
    conflict = report.conflicts[0]
    assert conflict.conflict_type == expected_type
    assert conflict.entity_id == entity
    assert conflict.affected_slots == ["s1", "s2"]
    assert "MONDAY" in conflict.description


def test_co_teacher_overlap_is_detected():
    first = slot("s1", teachers=["t1", "t9"])
    second = slot("s2", teacher="t2", teachers=["t2", "t9"], classes=("c2",), room="r2")

    report = ConflictService([first, second]).detect_conflicts()

    assert [conflict.entity_id for conflict in report.conflicts] == ["t9"]


def test_slots_without_room_never_clash_on_room():
    report = ConflictService(
        [slot("s1", room=None), slot("s2", teacher="t2", classes=("c2",), room=None)]
    ).detect_conflicts()

    assert report.count == 0


def test_no_conflicts():
    report = ConflictService(
        [
            slot("s1"),
            slot("s2", period="p2"),
            slot("s3", day="TUESDAY"),
        ]
    ).detect_conflicts()

    assert report.conflicts == []
    assert report.count == 0

import pytest

from autoslot.core.exceptions import SchedulerError
from autoslot.services.occupancy import OccupancyTracker
from autoslot.services.snapshot import EntityKind


def test_commit_marks_entry_occupied():
    tracker = OccupancyTracker()
    tracker.commit(EntityKind.teacher, "t1", "MONDAY", "p1")

    assert tracker.is_occupied(EntityKind.teacher, "t1", "MONDAY", "p1")
    assert not tracker.is_occupied(EntityKind.teacher, "t1", "MONDAY", "p2")
    assert not tracker.is_occupied(EntityKind.school_class, "t1", "MONDAY", "p1")
    assert len(tracker) == 1


def test_is_free_checks_every_period_in_window():
    tracker = OccupancyTracker()
    tracker.commit(EntityKind.room, "r1", "MONDAY", "p2")

    assert tracker.is_free(EntityKind.room, "r1", "MONDAY", ["p1"])
    assert not tracker.is_free(EntityKind.room, "r1", "MONDAY", ["p1", "p2"])
    assert tracker.is_free(EntityKind.room, "r1", "TUESDAY", ["p1", "p2"])


def test_double_commit_is_rejected():
    tracker = OccupancyTracker()
    tracker.commit(EntityKind.school_class, "c1", "MONDAY", "p1")

    with pytest.raises(SchedulerError) as exc_info:
        tracker.commit(EntityKind.school_class, "c1", "MONDAY", "p1")
    assert exc_info.value.details["entity_id"] == "c1"


def test_subjects_have_no_occupancy_namespace():
    tracker = OccupancyTracker()

    with pytest.raises(SchedulerError):
        tracker.commit(EntityKind.subject, "s1", "MONDAY", "p1")


def test_restore_drops_entries_after_checkpoint():
    tracker = OccupancyTracker()
    tracker.commit(EntityKind.teacher, "t1", "MONDAY", "p1")
    booked = tracker.checkpoint()
    tracker.commit(EntityKind.teacher, "t1", "MONDAY", "p2")

    tracker.restore(booked)

    assert tracker.is_occupied(EntityKind.teacher, "t1", "MONDAY", "p1")
    assert not tracker.is_occupied(EntityKind.teacher, "t1", "MONDAY", "p2")
    assert len(tracker) == 1

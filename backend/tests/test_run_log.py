from autoslot.services.run_log import ConflictReporter, RunLog
from autoslot.services.snapshot import LessonRequirement


def test_run_log_numbers_steps_in_order():
    log = RunLog()
    log.add("Loading periods and rooms...")
    log.add("Scheduling lessons...")

    steps = log.steps
    assert [step.step for step in steps] == [1, 2]
    assert [step.message for step in steps] == ["Loading periods and rooms...", "Scheduling lessons..."]
    assert steps[0].timestamp <= steps[1].timestamp
    assert len(log) == 2


def test_run_log_reports_progress():
    calls = []
    log = RunLog(on_progress=lambda step, total, message: calls.append((step, total, message)), total_hint=2)
    log.add("one")
    log.add("two")
    log.add("three")

    assert calls == [(1, 2, "one"), (2, 2, "two"), (3, 3, "three")]


def test_conflict_reporter_keeps_arrival_order():
    reporter = ConflictReporter()
    maths = LessonRequirement(
        id="l1",
        count=4,
        length=1,
        teacher_ids=("t1",),
        class_ids=("c1",),
        subject_id="s1",
        subject_name="Mathematics",
        teacher_names=("Ms Rao",),
        class_names=("7A",),
    )
    meeting = LessonRequirement(id="l2", count=1, length=1, teacher_ids=(), title="Staff meeting")

    short = reporter.record_shortfall(maths, placed=3)
    invalid = reporter.record_invalid(meeting, "At least one teacher is required")

    assert [record.requirement_id for record in reporter.records] == ["l1", "l2"]
    assert short.type == "insufficient_slots"
    assert (short.needed, short.placed, short.shortfall) == (4, 3, 1)
    assert short.label == "Mathematics"
    assert short.class_names == ["7A"]
    assert short.teacher_names == ["Ms Rao"]
    assert invalid.type == "invalid_requirement"
    assert (invalid.needed, invalid.placed) == (1, 0)
    assert invalid.label == "Staff meeting"
    assert invalid.reason == "At least one teacher is required"

from __future__ import annotations

import logging
from dataclasses import dataclass
from time import perf_counter

from sqlalchemy.orm import Session

from autoslot.schemas.generator import (
    GenerateTimetableRequest,
    GenerateTimetableResponse,
    GenerationSummary,
    PlacementOut,
)
from autoslot.services.run_log import ProgressCallback, RunLog
from autoslot.services.slot_allocator import SlotAllocator, ensure_periods, ensure_requirements
from autoslot.services.snapshot import SchedulingSnapshot
from autoslot.services.snapshot_loader import (
    load_periods,
    load_reference_ids,
    load_requirements,
    load_rooms,
    load_unavailability,
)
from autoslot.services.timetable_store import clear_timetable, persist_placements

logger = logging.getLogger(__name__)


@dataclass
class GenerationContext:
    """Caller-owned resources for one generation run."""

    db: Session
    on_progress: ProgressCallback | None = None


def generate(context: GenerationContext, config: GenerateTimetableRequest) -> GenerateTimetableResponse:
    """Load snapshots, place every lesson requirement and store the result in one transaction.

    Clearing old slots (when requested) and inserting the new ones share a single
    commit, so a failed run leaves the stored timetable untouched. Missing periods
    or lessons raise ``PreconditionError``; unplaceable occurrences are reported as
    conflicts in the response.
    """
    db = context.db
    run_log = RunLog(on_progress=context.on_progress)
    start = perf_counter()
    logger.info(
        "Timetable generation requested clear_existing=%s persist=%s active_days=%s",
        config.clear_existing,
        config.persist,
        ",".join(config.active_days),
    )

    try:
        if config.clear_existing:
            run_log.add("Clearing existing timetable...")
            clear_timetable(db)

        run_log.add("Loading periods and rooms...")
        periods = load_periods(db)
        ensure_periods(periods)
        rooms = load_rooms(db)

        run_log.add("Loading lesson configurations...")
        teacher_names, class_names, subject_names = load_reference_ids(db)
        requirements = load_requirements(
            db,
            teacher_names=teacher_names,
            class_names=class_names,
            subject_names=subject_names,
        )
        ensure_requirements(requirements)

        run_log.add("Checking time off constraints...")
        unavailability = load_unavailability(db)

        snapshot = SchedulingSnapshot(
            periods=periods,
            rooms=rooms,
            requirements=requirements,
            unavailability=unavailability,
            known_teacher_ids=frozenset(teacher_names),
            known_class_ids=frozenset(class_names),
            known_subject_ids=frozenset(subject_names),
        )
        outcome = SlotAllocator(snapshot, config.active_days, run_log=run_log).run()

        if config.persist:
            run_log.add("Saving timetable to database...")
            persist_placements(db, outcome.placements)
            db.commit()
        else:
            db.rollback()
    except Exception:
        db.rollback()
        raise

    run_log.add("Timetable generation complete!")
    runtime_ms = int((perf_counter() - start) * 1000)
    logger.info(
        "Timetable generation finished placed=%s conflicts=%s runtime_ms=%s",
        outcome.total_placed,
        len(outcome.conflicts),
        runtime_ms,
    )
    return GenerateTimetableResponse(
        success=True,
        total_placed=outcome.total_placed,
        total_conflicts=len(outcome.conflicts),
        conflicts=outcome.conflicts,
        steps=run_log.steps,
        summary=GenerationSummary(
            lesson_requirement_count=len(requirements),
            periods_per_day=len(periods),
            days_per_week=len(config.active_days),
            rooms_available=len(rooms),
            total_placements_created=outcome.total_placed,
        ),
        placements=[PlacementOut.model_validate(placement) for placement in outcome.placements],
        persisted=config.persist,
        runtime_ms=runtime_ms,
    )

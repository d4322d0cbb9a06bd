from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from autoslot.schemas.generator import ConflictRecord, RunStep
from autoslot.services.snapshot import LessonRequirement

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]

# Rough number of fixed checkpoints in one run, reported to progress listeners.
EXPECTED_STEPS = 10


class RunLog:
    def __init__(self, on_progress: ProgressCallback | None = None, *, total_hint: int = EXPECTED_STEPS) -> None:
        self._steps: list[RunStep] = []
        self._on_progress = on_progress
        self.total_hint = total_hint

    def add(self, message: str) -> RunStep:
        step = RunStep(step=len(self._steps) + 1, message=message, timestamp=datetime.now(timezone.utc))
        self._steps.append(step)
        logger.info("Generation step=%s %s", step.step, message)
        if self._on_progress is not None:
            self._on_progress(step.step, max(self.total_hint, step.step), message)
        return step

    @property
    def steps(self) -> list[RunStep]:
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)


class ConflictReporter:
    """Requirements that ended the run short, in the order they were processed."""

    def __init__(self) -> None:
        self._records: list[ConflictRecord] = []

    def _record(self, requirement: LessonRequirement, **fields) -> ConflictRecord:
        record = ConflictRecord(
            requirement_id=requirement.id,
            label=requirement.label,
            class_ids=list(requirement.class_ids),
            class_names=list(requirement.class_names),
            teacher_ids=list(requirement.teacher_ids),
            teacher_names=list(requirement.teacher_names),
            **fields,
        )
        self._records.append(record)
        return record

    def record_shortfall(self, requirement: LessonRequirement, placed: int) -> ConflictRecord:
        logger.warning(
            "Lesson requirement short | requirement_id=%s label=%s needed=%s placed=%s",
            requirement.id,
            requirement.label,
            requirement.count,
            placed,
        )
        return self._record(requirement, type="insufficient_slots", needed=requirement.count, placed=placed)

    def record_invalid(self, requirement: LessonRequirement, reason: str) -> ConflictRecord:
        logger.warning(
            "Lesson requirement skipped | requirement_id=%s label=%s reason=%s",
            requirement.id,
            requirement.label,
            reason,
        )
        return self._record(
            requirement,
            type="invalid_requirement",
            needed=max(requirement.count, 0),
            placed=0,
            reason=reason,
        )

    @property
    def records(self) -> list[ConflictRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from autoslot.core.exceptions import PreconditionError, RequirementError
from autoslot.schemas.generator import ConflictRecord
from autoslot.services.constraint_index import ConstraintIndex
from autoslot.services.difficulty import rank_requirements
from autoslot.services.occupancy import OccupancyTracker
from autoslot.services.room_resolver import RoomResolver, resolve_room_category
from autoslot.services.run_log import ConflictReporter, RunLog
from autoslot.services.snapshot import (
    EntityKind,
    LessonRequirement,
    PeriodSlot,
    Placement,
    RoomOption,
    SchedulingSnapshot,
    allocatable_periods,
)

logger = logging.getLogger(__name__)

DistributionKey = tuple[tuple[str, str], tuple[str, str], str]


def ensure_periods(periods: Sequence[PeriodSlot]) -> None:
    if not allocatable_periods(periods):
        raise PreconditionError("No periods configured. Set up school periods first.")


def ensure_requirements(requirements: Sequence[LessonRequirement]) -> None:
    if not requirements:
        raise PreconditionError("No timetable lessons configured. Create lessons first.")


def ensure_active_days(active_days: Sequence[str]) -> None:
    if not active_days:
        raise PreconditionError("No active days configured for timetable generation.")
    if len(set(active_days)) != len(active_days):
        raise PreconditionError(
            "Active days must not repeat.",
            details={"active_days": list(active_days)},
        )


@dataclass
class AllocationOutcome:
    placements: list[Placement] = field(default_factory=list)
    conflicts: list[ConflictRecord] = field(default_factory=list)
    placed_counts: dict[str, int] = field(default_factory=dict)
    processing_order: list[str] = field(default_factory=list)

    @property
    def total_placed(self) -> int:
        return len(self.placements)


class SlotAllocator:
    """First-fit greedy placement of lesson requirements onto days, period blocks and rooms.

    Requirements are tried hardest first. Each occurrence takes the first day (in
    the given day order) and the first feasible block of consecutive periods on
    that day; nothing placed is ever moved again. Occurrences that find no
    window are counted as a shortfall for the requirement, never raised.

    A fresh allocator (and occupancy state) is needed for every run.
    """

    def __init__(
        self,
        snapshot: SchedulingSnapshot,
        active_days: Sequence[str],
        *,
        run_log: RunLog | None = None,
    ) -> None:
        self.periods = allocatable_periods(snapshot.periods)
        ensure_periods(self.periods)
        ensure_requirements(snapshot.requirements)
        ensure_active_days(active_days)

        self.snapshot = snapshot
        self.active_days = tuple(active_days)
        self.run_log = run_log if run_log is not None else RunLog()
        self._used = False

    def _validate_requirement(self, requirement: LessonRequirement) -> None:
        if requirement.count < 1:
            raise RequirementError(requirement.id, "Occurrence count must be at least 1")
        if requirement.length < 1:
            raise RequirementError(requirement.id, "Lesson length must be at least 1 period")
        if not requirement.teacher_ids:
            raise RequirementError(requirement.id, "At least one teacher is required")
        if (requirement.subject_id is None) == (requirement.title is None):
            raise RequirementError(requirement.id, "Lesson must reference either a subject or a meeting title")
        if not requirement.is_meeting and not requirement.class_ids:
            raise RequirementError(requirement.id, "Subject lessons need at least one class")
        if len(set(requirement.teacher_ids)) != len(requirement.teacher_ids):
            raise RequirementError(requirement.id, "Teacher listed more than once")
        if len(set(requirement.class_ids)) != len(requirement.class_ids):
            raise RequirementError(requirement.id, "Class listed more than once")

        known_teachers = self.snapshot.known_teacher_ids
        if known_teachers is not None:
            missing = [teacher_id for teacher_id in requirement.teacher_ids if teacher_id not in known_teachers]
            if missing:
                raise RequirementError(requirement.id, f"Unknown teacher id(s): {', '.join(missing)}")
        known_classes = self.snapshot.known_class_ids
        if known_classes is not None:
            missing = [class_id for class_id in requirement.class_ids if class_id not in known_classes]
            if missing:
                raise RequirementError(requirement.id, f"Unknown class id(s): {', '.join(missing)}")
        known_subjects = self.snapshot.known_subject_ids
        if known_subjects is not None and requirement.subject_id is not None:
            if requirement.subject_id not in known_subjects:
                raise RequirementError(requirement.id, f"Unknown subject id: {requirement.subject_id}")

    @staticmethod
    def _distribution_keys(requirement: LessonRequirement, day: str) -> list[DistributionKey]:
        owners = [("class", class_id) for class_id in requirement.class_ids]
        if not owners:
            owners = [("lesson", requirement.id)]
        return [(owner, requirement.distribution_key, day) for owner in owners]

    def _daily_cap(self, requirement: LessonRequirement) -> int:
        return max(1, math.ceil(requirement.count / len(self.active_days)))

    def _window_is_free(
        self,
        requirement: LessonRequirement,
        day: str,
        window: Sequence[PeriodSlot],
        occupancy: OccupancyTracker,
        constraints: ConstraintIndex,
    ) -> bool:
        for period in window:
            for class_id in requirement.class_ids:
                if occupancy.is_occupied(EntityKind.school_class, class_id, day, period.id):
                    return False
                if constraints.is_unavailable(EntityKind.school_class, class_id, day, period.id):
                    return False
            if requirement.subject_id is not None and constraints.is_unavailable(
                EntityKind.subject, requirement.subject_id, day, period.id
            ):
                return False
            for teacher_id in requirement.teacher_ids:
                if occupancy.is_occupied(EntityKind.teacher, teacher_id, day, period.id):
                    return False
                if constraints.is_unavailable(EntityKind.teacher, teacher_id, day, period.id):
                    return False
        return True

    def _place_occurrence(
        self,
        requirement: LessonRequirement,
        room_category: str,
        *,
        occupancy: OccupancyTracker,
        constraints: ConstraintIndex,
        rooms: RoomResolver,
        day_counts: Counter,
        placements: list[Placement],
    ) -> bool:
        cap = self._daily_cap(requirement)
        total_periods = len(self.periods)

        for day in self.active_days:
            keys = self._distribution_keys(requirement, day)
            if any(day_counts[key] >= cap for key in keys):
                continue

            start = 0
            while start + requirement.length <= total_periods:
                window = self.periods[start : start + requirement.length]
                start += 1
                if not self._window_is_free(requirement, day, window, occupancy, constraints):
                    continue

                room = self._select_room(requirement, rooms, room_category, day, window)
                for period in window:
                    for class_id in requirement.class_ids:
                        occupancy.commit(EntityKind.school_class, class_id, day, period.id)
                    for teacher_id in requirement.teacher_ids:
                        occupancy.commit(EntityKind.teacher, teacher_id, day, period.id)
                    if room is not None:
                        occupancy.commit(EntityKind.room, room.id, day, period.id)
                    placements.append(
                        Placement(
                            day=day,
                            period_id=period.id,
                            period_number=period.number,
                            requirement_id=requirement.id,
                            subject_id=requirement.subject_id,
                            room_id=room.id if room is not None else None,
                            class_ids=requirement.class_ids,
                            teacher_ids=requirement.teacher_ids,
                        )
                    )
                for key in keys:
                    day_counts[key] += 1
                return True
        return False

    @staticmethod
    def _resolve_category(requirement: LessonRequirement) -> str:
        try:
            return resolve_room_category(requirement.subject_name, requirement.room_category)
        except Exception as exc:
            raise RequirementError(requirement.id, f"Room category could not be resolved: {exc!r}") from exc

    @staticmethod
    def _select_room(
        requirement: LessonRequirement,
        rooms: RoomResolver,
        room_category: str,
        day: str,
        window: Sequence[PeriodSlot],
    ) -> RoomOption | None:
        try:
            return rooms.select_room(room_category, day, [period.id for period in window])
        except Exception as exc:
            raise RequirementError(requirement.id, f"Room selection failed: {exc!r}") from exc

    def _skip(
        self,
        requirement: LessonRequirement,
        reason: str,
        reporter: ConflictReporter,
        outcome: AllocationOutcome,
    ) -> None:
        reporter.record_invalid(requirement, reason)
        outcome.placed_counts[requirement.id] = 0
        self.run_log.add(f"Skipped {requirement.label}: {reason}")

    @staticmethod
    def _audience(requirement: LessonRequirement) -> str:
        classes = requirement.class_names or requirement.class_ids
        if classes:
            return ", ".join(classes)
        return ", ".join(requirement.teacher_names or requirement.teacher_ids)

    def run(self) -> AllocationOutcome:
        if self._used:
            raise RuntimeError("SlotAllocator instances are single-use; build a new one per run")
        self._used = True

        constraints = ConstraintIndex(self.snapshot.unavailability)
        occupancy = OccupancyTracker()
        rooms = RoomResolver(self.snapshot.rooms, occupancy)
        reporter = ConflictReporter()
        day_counts: Counter = Counter()
        outcome = AllocationOutcome()

        logger.info(
            "Allocator start requirements=%s periods=%s days=%s rooms=%s unavailable=%s",
            len(self.snapshot.requirements),
            len(self.periods),
            len(self.active_days),
            len(self.snapshot.rooms),
            constraints.counts(),
        )
        self.run_log.add("Scheduling lessons...")

        for requirement in rank_requirements(self.snapshot.requirements):
            outcome.processing_order.append(requirement.id)
            try:
                self._validate_requirement(requirement)
                room_category = self._resolve_category(requirement)
            except RequirementError as exc:
                self._skip(requirement, exc.message, reporter, outcome)
                continue

            # A room fault abandons the requirement; undo its earlier occurrences.
            first_placement = len(outcome.placements)
            booked = occupancy.checkpoint()
            counts_before = day_counts.copy()
            placed = 0
            try:
                for _ in range(requirement.count):
                    if self._place_occurrence(
                        requirement,
                        room_category,
                        occupancy=occupancy,
                        constraints=constraints,
                        rooms=rooms,
                        day_counts=day_counts,
                        placements=outcome.placements,
                    ):
                        placed += 1
            except RequirementError as exc:
                del outcome.placements[first_placement:]
                occupancy.restore(booked)
                day_counts.clear()
                day_counts.update(counts_before)
                self._skip(requirement, exc.message, reporter, outcome)
                continue

            outcome.placed_counts[requirement.id] = placed
            if placed < requirement.count:
                reporter.record_shortfall(requirement, placed)
            self.run_log.add(
                f"Placed {requirement.label} for {self._audience(requirement)} ({placed}/{requirement.count})"
            )

        outcome.conflicts = reporter.records
        return outcome

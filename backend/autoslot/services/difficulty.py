from __future__ import annotations

from collections.abc import Iterable

from autoslot.services.snapshot import LessonRequirement


def difficulty_score(requirement: LessonRequirement) -> int:
    return (
        3 * requirement.length
        + 2 * len(requirement.teacher_ids)
        + len(requirement.class_ids)
        + (1 if requirement.room_category else 0)
    )


def rank_requirements(requirements: Iterable[LessonRequirement]) -> list[LessonRequirement]:
    """Hardest first. ``sorted`` is stable, so equal scores keep their input order."""
    return sorted(requirements, key=lambda requirement: -difficulty_score(requirement))

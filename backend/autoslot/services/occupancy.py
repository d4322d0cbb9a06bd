from __future__ import annotations

from collections.abc import Iterable

from autoslot.core.exceptions import SchedulerError
from autoslot.services.snapshot import EntityKind

OCCUPANCY_KINDS = frozenset({EntityKind.teacher, EntityKind.school_class, EntityKind.room})


class OccupancyTracker:
    """Committed (kind, entity, day, period) entries of the current run.

    Entries are only added during placement. ``restore`` returns to an earlier
    ``checkpoint`` when a requirement is abandoned part way through.
    """

    def __init__(self) -> None:
        self._entries: set[tuple[EntityKind, str, str, str]] = set()

    def is_occupied(self, kind: EntityKind, entity_id: str, day: str, period_id: str) -> bool:
        return (kind, entity_id, day, period_id) in self._entries

    def is_free(self, kind: EntityKind, entity_id: str, day: str, period_ids: Iterable[str]) -> bool:
        return not any(self.is_occupied(kind, entity_id, day, period_id) for period_id in period_ids)

    def commit(self, kind: EntityKind, entity_id: str, day: str, period_id: str) -> None:
        if kind not in OCCUPANCY_KINDS:
            raise SchedulerError(f"Occupancy is not tracked for {kind.value} entities")
        key = (kind, entity_id, day, period_id)
        if key in self._entries:
            raise SchedulerError(
                message=f"{kind.value} {entity_id} is already booked on {day} at period {period_id}",
                details={"kind": kind.value, "entity_id": entity_id, "day": day, "period_id": period_id},
            )
        self._entries.add(key)

    def checkpoint(self) -> frozenset[tuple[EntityKind, str, str, str]]:
        return frozenset(self._entries)

    def restore(self, checkpoint: frozenset[tuple[EntityKind, str, str, str]]) -> None:
        self._entries.intersection_update(checkpoint)

    def __len__(self) -> int:
        return len(self._entries)

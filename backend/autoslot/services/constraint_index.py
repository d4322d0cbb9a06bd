from __future__ import annotations

from collections.abc import Iterable

from autoslot.services.snapshot import EntityKind, UnavailabilityRecord

CONSTRAINT_KINDS = (EntityKind.teacher, EntityKind.school_class, EntityKind.subject)


class ConstraintIndex:
    """Membership sets of (entity, day, period) triples marked unavailable.

    Built once per run from teacher, class and subject time-off records.
    """

    def __init__(self, records: Iterable[UnavailabilityRecord] = ()) -> None:
        self._blocked: dict[EntityKind, set[tuple[str, str, str]]] = {kind: set() for kind in CONSTRAINT_KINDS}
        for record in records:
            self._blocked.setdefault(record.kind, set()).add((record.entity_id, record.day, record.period_id))

    def is_unavailable(self, kind: EntityKind, entity_id: str, day: str, period_id: str) -> bool:
        blocked = self._blocked.get(kind)
        if not blocked:
            return False
        return (entity_id, day, period_id) in blocked

    def counts(self) -> dict[str, int]:
        return {kind.value: len(entries) for kind, entries in self._blocked.items()}

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._blocked.values())

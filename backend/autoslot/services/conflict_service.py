from typing import Dict, List, Tuple

from autoslot.schemas.conflict import OverlapDetail, OverlapReport
from autoslot.schemas.timetable import TimetableSlotOut

class ConflictService:
    """Audits persisted slots for double bookings of a teacher, class or room."""

    def __init__(self, slots: List[TimetableSlotOut]):
        self.slots = slots

    def detect_conflicts(self) -> OverlapReport:
        conflicts: List[OverlapDetail] = []
        # (kind, entity, day, period) -> first slot holding it
        seen: Dict[Tuple[str, str, str, str], TimetableSlotOut] = {}

        def check(kind: str, entity_id: str, slot: TimetableSlotOut) -> None:
            key = (kind, entity_id, slot.day_of_week, slot.period_id)
            first = seen.get(key)
            if first is None:
                seen[key] = slot
                return
            conflicts.append(OverlapDetail(
                id=f"{kind}-{first.id}-{slot.id}",
                conflict_type=f"{kind}_overlap",
                description=(
                    f"{kind.capitalize()} {entity_id} booked twice on {slot.day_of_week} "
                    f"at period {slot.period_number or slot.period_id}"
                ),
                entity_id=entity_id,
                day=slot.day_of_week,
                period_id=slot.period_id,
                affected_slots=[first.id, slot.id],
            ))

        for slot in self.slots:
            for teacher_id in slot.teacher_ids or [slot.teacher_id]:
                check("teacher", teacher_id, slot)
            for class_id in slot.class_ids:
                check("class", class_id, slot)
            if slot.room_id:
                check("room", slot.room_id, slot)

        return OverlapReport(conflicts=conflicts, count=len(conflicts))

from pydantic import BaseModel
from typing import Literal, List

class OverlapDetail(BaseModel):
    id: str
    conflict_type: Literal["teacher_overlap", "class_overlap", "room_overlap"]
    description: str
    entity_id: str
    day: str
    period_id: str
    affected_slots: List[str]  # First slot holding the key, then the clashing slot

class OverlapReport(BaseModel):
    conflicts: List[OverlapDetail]
    count: int

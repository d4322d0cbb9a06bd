from __future__ import annotations

from pydantic import BaseModel, Field


class PeriodOut(BaseModel):
    id: str
    number: int
    start_time: str
    end_time: str
    is_break: bool = False
    label: str | None = None

    model_config = {"from_attributes": True}


class TimetableSlotOut(BaseModel):
    id: str
    day_of_week: str
    period_id: str
    period_number: int | None = None
    lesson_id: str
    subject_id: str | None = None
    room_id: str | None = None
    teacher_id: str
    class_ids: list[str] = Field(default_factory=list)
    teacher_ids: list[str] = Field(default_factory=list)


class TimetableView(BaseModel):
    slots: list[TimetableSlotOut]
    periods: list[PeriodOut]
    days: list[str]

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from autoslot.core.config import get_settings

DAY_ORDER = (
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
)
DAY_VALUES = set(DAY_ORDER)


def normalize_day(value: str) -> str:
    day = value.strip().upper()
    if day not in DAY_VALUES:
        raise ValueError(f"Invalid day value: {value}")
    return day


def default_active_days() -> list[str]:
    return [normalize_day(day) for day in get_settings().default_active_days]


class GenerateTimetableRequest(BaseModel):
    clear_existing: bool = False
    active_days: list[str] = Field(default_factory=default_active_days, min_length=1, max_length=7)
    persist: bool = True

    @field_validator("active_days")
    @classmethod
    def validate_active_days(cls, value: list[str]) -> list[str]:
        days = [normalize_day(day) for day in value]
        duplicates = sorted({day for day in days if days.count(day) > 1})
        if duplicates:
            raise ValueError(f"Duplicate active day(s): {', '.join(duplicates)}")
        return days


class RunStep(BaseModel):
    step: int = Field(ge=1)
    message: str
    timestamp: datetime


ConflictType = Literal["insufficient_slots", "invalid_requirement"]


class ConflictRecord(BaseModel):
    type: ConflictType = "insufficient_slots"
    requirement_id: str
    label: str
    class_ids: list[str] = Field(default_factory=list)
    class_names: list[str] = Field(default_factory=list)
    teacher_ids: list[str] = Field(default_factory=list)
    teacher_names: list[str] = Field(default_factory=list)
    needed: int = Field(ge=0)
    placed: int = Field(ge=0)
    reason: str | None = None

    @property
    def shortfall(self) -> int:
        return self.needed - self.placed


class PlacementOut(BaseModel):
    day: str
    period_id: str
    period_number: int
    requirement_id: str
    subject_id: str | None = None
    room_id: str | None = None
    class_ids: list[str] = Field(default_factory=list)
    teacher_ids: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class GenerationSummary(BaseModel):
    lesson_requirement_count: int
    periods_per_day: int
    days_per_week: int
    rooms_available: int
    total_placements_created: int


class GenerateTimetableResponse(BaseModel):
    success: bool = True
    total_placed: int
    total_conflicts: int
    conflicts: list[ConflictRecord] = Field(default_factory=list)
    steps: list[RunStep] = Field(default_factory=list)
    summary: GenerationSummary
    placements: list[PlacementOut] = Field(default_factory=list)
    persisted: bool = True
    runtime_ms: int = 0

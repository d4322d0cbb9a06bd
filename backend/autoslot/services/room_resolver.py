from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from autoslot.models.room import RoomType
from autoslot.services.occupancy import OccupancyTracker
from autoslot.services.snapshot import EntityKind, RoomOption

GENERIC_ROOM_CATEGORY = RoomType.regular.value

# Checked in order; the first keyword found in the subject name decides the category.
SUBJECT_ROOM_KEYWORDS: tuple[tuple[str, RoomType], ...] = (
    ("computer", RoomType.computer_lab),
    ("ict", RoomType.computer_lab),
    ("science", RoomType.lab),
    ("physics", RoomType.lab),
    ("chemistry", RoomType.lab),
    ("biology", RoomType.lab),
    ("physical education", RoomType.physical_education),
    ("sports", RoomType.physical_education),
    ("pe", RoomType.physical_education),
    ("library", RoomType.library),
)

# Short keywords only match whole words ("pe" must not hit "speech").
_KEYWORD_PATTERNS = tuple(
    (
        re.compile(rf"\b{re.escape(keyword)}\b") if len(keyword) <= 3 else re.compile(re.escape(keyword)),
        room_type.value,
    )
    for keyword, room_type in SUBJECT_ROOM_KEYWORDS
)


def normalize_category(value: RoomType | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, RoomType):
        return value.value
    cleaned = str(value).strip().lower()
    return cleaned or None


def resolve_room_category(subject_name: str | None, explicit_category: RoomType | str | None = None) -> str:
    explicit = normalize_category(explicit_category)
    if explicit:
        return explicit
    lowered = (subject_name or "").lower()
    for pattern, category in _KEYWORD_PATTERNS:
        if pattern.search(lowered):
            return category
    return GENERIC_ROOM_CATEGORY


class RoomResolver:
    def __init__(self, rooms: Iterable[RoomOption], occupancy: OccupancyTracker) -> None:
        self.occupancy = occupancy
        self.buckets: dict[str, list[RoomOption]] = {}
        for room in rooms:
            self.buckets.setdefault(normalize_category(room.category) or GENERIC_ROOM_CATEGORY, []).append(room)

    def _first_free(self, category: str, day: str, period_ids: Sequence[str]) -> RoomOption | None:
        for room in self.buckets.get(category, []):
            if self.occupancy.is_free(EntityKind.room, room.id, day, period_ids):
                return room
        return None

    def select_room(self, category: str, day: str, period_ids: Sequence[str]) -> RoomOption | None:
        room = self._first_free(category, day, period_ids)
        if room is None and category != GENERIC_ROOM_CATEGORY:
            room = self._first_free(GENERIC_ROOM_CATEGORY, day, period_ids)
        return room

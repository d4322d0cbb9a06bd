import pytest

from autoslot.models.room import RoomType
from autoslot.services.occupancy import OccupancyTracker
from autoslot.services.room_resolver import GENERIC_ROOM_CATEGORY, RoomResolver, resolve_room_category
from autoslot.services.snapshot import EntityKind, RoomOption


@pytest.mark.parametrize(
    ("subject_name", "expected"),
    [
        ("Physics", "lab"),
        ("General Science", "lab"),
        ("Chemistry II", "lab"),
        ("Biology", "lab"),
        ("Computer Science", "computer_lab"),
        ("ICT", "computer_lab"),
        ("Physical Education", "physical_education"),
        ("Sports", "physical_education"),
        ("PE", "physical_education"),
        ("Library Hour", "library"),
        ("Mathematics", GENERIC_ROOM_CATEGORY),
        ("Speech and Drama", GENERIC_ROOM_CATEGORY),
        ("Dictation", GENERIC_ROOM_CATEGORY),
        (None, GENERIC_ROOM_CATEGORY),
    ],
)
def test_resolve_room_category_from_subject_name(subject_name, expected):
    assert resolve_room_category(subject_name) == expected


def test_explicit_category_wins_over_keywords():
    assert resolve_room_category("Physics", "library") == "library"
    assert resolve_room_category("Physics", RoomType.computer_lab) == "computer_lab"
    assert resolve_room_category("Physics", "  LAB ") == "lab"


def _resolver(rooms):
    tracker = OccupancyTracker()
    return RoomResolver(rooms, tracker), tracker


def test_select_room_takes_first_free_room_in_input_order():
    resolver, tracker = _resolver(
        [
            RoomOption(id="lab-b", category="lab"),
            RoomOption(id="lab-a", category="lab"),
        ]
    )
    assert resolver.select_room("lab", "MONDAY", ["p1", "p2"]).id == "lab-b"

    tracker.commit(EntityKind.room, "lab-b", "MONDAY", "p2")
    assert resolver.select_room("lab", "MONDAY", ["p1", "p2"]).id == "lab-a"
    assert resolver.select_room("lab", "MONDAY", ["p1"]).id == "lab-b"


def test_select_room_falls_back_to_generic_bucket():
    resolver, tracker = _resolver(
        [
            RoomOption(id="lab-1", category="lab"),
            RoomOption(id="room-1", category="regular"),
        ]
    )
    tracker.commit(EntityKind.room, "lab-1", "MONDAY", "p1")

    assert resolver.select_room("lab", "MONDAY", ["p1"]).id == "room-1"
    assert resolver.select_room("library", "MONDAY", ["p1"]).id == "room-1"


def test_select_room_returns_none_when_nothing_is_free():
    resolver, tracker = _resolver([RoomOption(id="room-1", category="regular")])
    tracker.commit(EntityKind.room, "room-1", "MONDAY", "p1")

    assert resolver.select_room("regular", "MONDAY", ["p1"]) is None
    assert resolver.select_room("lab", "MONDAY", ["p1"]) is None


def test_select_room_without_any_rooms():
    resolver, _ = _resolver([])
    assert resolver.select_room("lab", "MONDAY", ["p1"]) is None

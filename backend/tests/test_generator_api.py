from autoslot.models.timetable_slot import TimetableSlot, TimetableSlotClass, TimetableSlotTeacher


def generate_timetable(client, **payload):
    response = client.post("/api/timetable/auto-generate", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def test_auto_generate_endpoint_returns_summary(client, school):
    body = generate_timetable(client)

    assert body["success"] is True
    assert body["total_placed"] == 9
    assert body["total_conflicts"] == 0
    assert body["persisted"] is True
    assert body["summary"]["periods_per_day"] == 4
    assert body["summary"]["days_per_week"] == 5
    assert body["steps"][-1]["message"] == "Timetable generation complete!"


def test_auto_generate_accepts_empty_body(client, school):
    response = client.post("/api/timetable/auto-generate")

    assert response.status_code == 200
    assert response.json()["total_placed"] == 9


def test_auto_generate_without_periods_returns_bad_request(client, school_without_periods):
    response = client.post("/api/timetable/auto-generate", json={"clear_existing": True})

    assert response.status_code == 400
    assert response.json() == {
        "message": "No periods configured. Set up school periods first.",
        "details": {},
    }


def test_auto_generate_rejects_unknown_day(client, school):
    response = client.post("/api/timetable/auto-generate", json={"active_days": ["MONDAY", "FUNDAY"]})

    assert response.status_code == 422


def test_auto_generate_rejects_repeated_day(client, school):
    response = client.post("/api/timetable/auto-generate", json={"active_days": ["monday", "MONDAY"]})

    assert response.status_code == 422


def test_class_teacher_and_room_views(client, school):
    generate_timetable(client)

    class_view = client.get("/api/timetable/class/c-7a")
    assert class_view.status_code == 200
    payload = class_view.json()
    assert len(payload["slots"]) == 5
    assert payload["days"][:5] == ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY"]
    assert [period["number"] for period in payload["periods"]] == [1, 2, 3, 4, 5]
    assert all(slot["class_ids"] == ["c-7a"] for slot in payload["slots"])

    teacher_view = client.get("/api/timetable/teacher/t-sci").json()
    assert [(slot["day_of_week"], slot["period_number"]) for slot in teacher_view["slots"]] == [
        ("MONDAY", 1),
        ("MONDAY", 2),
        ("TUESDAY", 1),
        ("TUESDAY", 2),
    ]

    room_view = client.get("/api/timetable/room/lab-1").json()
    assert len(room_view["slots"]) == 4
    assert {slot["lesson_id"] for slot in room_view["slots"]} == {"lesson-chem-7b"}


def test_views_return_not_found_for_unknown_entities(client, school):
    response = client.get("/api/timetable/class/missing")

    assert response.status_code == 404
    assert response.json()["message"] == "Class with id missing not found"
    assert client.get("/api/timetable/teacher/missing").status_code == 404
    assert client.get("/api/timetable/room/missing").status_code == 404


def test_conflict_audit_is_clean_after_generation(client, school):
    generate_timetable(client)

    response = client.get("/api/timetable/conflicts")

    assert response.status_code == 200
    assert response.json() == {"conflicts": [], "count": 0}


def test_conflict_audit_flags_manual_double_booking(client, school):
    generate_timetable(client)
    school.add_all(
        [
            TimetableSlot(
                id="manual-slot",
                day_of_week="MONDAY",
                period_id="period-1",
                lesson_id="manual-lesson",
                subject_id="s-maths",
                room_id="room-101",
                teacher_id="t-maths",
            ),
            TimetableSlotClass(slot_id="manual-slot", class_id="c-7b"),
            TimetableSlotTeacher(slot_id="manual-slot", teacher_id="t-maths"),
        ]
    )
    school.commit()

    report = client.get("/api/timetable/conflicts").json()

    kinds = sorted(conflict["conflict_type"] for conflict in report["conflicts"])
    assert kinds == ["class_overlap", "room_overlap", "teacher_overlap"]
    assert report["count"] == 3
    assert all("manual-slot" in conflict["affected_slots"] for conflict in report["conflicts"])

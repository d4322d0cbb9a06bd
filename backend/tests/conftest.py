import os
import tempfile
from pathlib import Path

# The app engine is built at import time; point it at a throwaway file before anything imports it.
os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{Path(tempfile.mkdtemp()) / 'autoslot-test.db'}"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import autoslot.models  # noqa: E402,F401
from autoslot.api.deps import get_db  # noqa: E402
from autoslot.db.base import Base  # noqa: E402
from autoslot.main import app  # noqa: E402
from autoslot.models.lesson import TimetableLesson, TimetableLessonClass, TimetableLessonTeacher  # noqa: E402
from autoslot.models.period import Period  # noqa: E402
from autoslot.models.room import Room, RoomType  # noqa: E402
from autoslot.models.school import SchoolClass, Subject, Teacher  # noqa: E402


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def seed_school(db, *, with_lessons=True, with_periods=True):
    """Two classes, two teachers, a lab and a classroom, and a five-period day with one break."""
    if with_periods:
        db.add_all(
            [
                Period(id="period-1", number=1, start_time="08:00", end_time="08:45"),
                Period(id="period-2", number=2, start_time="08:45", end_time="09:30"),
                Period(id="period-break", number=3, start_time="09:30", end_time="10:00", is_break=True, label="Break"),
                Period(id="period-4", number=4, start_time="10:00", end_time="10:45"),
                Period(id="period-5", number=5, start_time="10:45", end_time="11:30"),
            ]
        )
    db.add_all(
        [
            Teacher(id="t-maths", name="Ms Rao"),
            Teacher(id="t-sci", name="Mr Okafor"),
            SchoolClass(id="c-7a", name="Grade 7A", grade=7, section="A"),
            SchoolClass(id="c-7b", name="Grade 7B", grade=7, section="B"),
            Subject(id="s-maths", name="Mathematics", code="MATH7"),
            Subject(id="s-chem", name="Chemistry", code="CHEM7"),
            Room(id="room-101", name="Room 101", type=RoomType.regular),
            Room(id="lab-1", name="Lab 1", type=RoomType.lab, capacity=30),
        ]
    )
    if with_lessons:
        db.add_all(
            [
                TimetableLesson(id="lesson-maths-7a", subject_id="s-maths", count=5, length=1),
                TimetableLessonTeacher(lesson_id="lesson-maths-7a", teacher_id="t-maths"),
                TimetableLessonClass(lesson_id="lesson-maths-7a", class_id="c-7a"),
                TimetableLesson(id="lesson-chem-7b", subject_id="s-chem", count=2, length=2),
                TimetableLessonTeacher(lesson_id="lesson-chem-7b", teacher_id="t-sci"),
                TimetableLessonClass(lesson_id="lesson-chem-7b", class_id="c-7b"),
            ]
        )
    db.commit()


@pytest.fixture()
def school(db_session):
    seed_school(db_session)
    return db_session


@pytest.fixture()
def school_without_periods(db_session):
    seed_school(db_session, with_periods=False)
    return db_session


@pytest.fixture()
def school_without_lessons(db_session):
    seed_school(db_session, with_lessons=False)
    return db_session

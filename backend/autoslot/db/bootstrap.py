from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

import autoslot.models  # noqa: F401
from autoslot.db.base import Base
from autoslot.db.session import engine as default_engine

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "periods": {"id", "number", "is_break"},
    "rooms": {"id", "name", "type", "capacity"},
    "timetable_lessons": {"id", "subject_id", "title", "count", "length", "room_type"},
    "teacher_availability": {"teacher_id", "day_of_week", "period_id", "state"},
    "class_availability": {"class_id", "day_of_week", "period_id", "state"},
    "subject_availability": {"subject_id", "day_of_week", "period_id", "state"},
    "timetable_slots": {"id", "day_of_week", "period_id", "lesson_id", "room_id", "teacher_id"},
}


def _assert_required_columns(bind: Engine) -> None:
    with bind.begin() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        missing_tables = [name for name in REQUIRED_COLUMNS if name not in table_names]
        if missing_tables:
            raise RuntimeError(f"Missing required tables: {', '.join(sorted(missing_tables))}")

        missing_columns: list[str] = []
        for table_name, required in REQUIRED_COLUMNS.items():
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            for column_name in sorted(required - existing):
                missing_columns.append(f"{table_name}.{column_name}")
        if missing_columns:
            raise RuntimeError(f"Missing required columns: {', '.join(missing_columns)}")


def ensure_schema(bind: Engine | None = None) -> None:
    bind = bind or default_engine
    try:
        Base.metadata.create_all(bind=bind)
        _assert_required_columns(bind)
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Schema bootstrap failed")
        raise RuntimeError("Schema bootstrap failed") from exc

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from autoslot.api.deps import get_db
from autoslot.core.exceptions import ResourceNotFoundError
from autoslot.models.period import Period
from autoslot.models.room import Room
from autoslot.models.school import SchoolClass, Teacher
from autoslot.schemas.conflict import OverlapReport
from autoslot.schemas.generator import DAY_ORDER
from autoslot.schemas.timetable import PeriodOut, TimetableSlotOut, TimetableView
from autoslot.services.conflict_service import ConflictService
from autoslot.services.timetable_store import list_slots

router = APIRouter()


def _view(db: Session, slots: list[TimetableSlotOut]) -> TimetableView:
    periods = db.execute(select(Period).order_by(Period.number)).scalars().all()
    return TimetableView(
        slots=slots,
        periods=[PeriodOut.model_validate(period) for period in periods],
        days=list(DAY_ORDER[:6]),
    )


@router.get("/class/{class_id}", response_model=TimetableView)
def class_timetable(class_id: str, db: Session = Depends(get_db)) -> TimetableView:
    if db.get(SchoolClass, class_id) is None:
        raise ResourceNotFoundError("Class", class_id)
    return _view(db, list_slots(db, class_id=class_id))


@router.get("/teacher/{teacher_id}", response_model=TimetableView)
def teacher_timetable(teacher_id: str, db: Session = Depends(get_db)) -> TimetableView:
    if db.get(Teacher, teacher_id) is None:
        raise ResourceNotFoundError("Teacher", teacher_id)
    return _view(db, list_slots(db, teacher_id=teacher_id))


@router.get("/room/{room_id}", response_model=TimetableView)
def room_timetable(room_id: str, db: Session = Depends(get_db)) -> TimetableView:
    if db.get(Room, room_id) is None:
        raise ResourceNotFoundError("Room", room_id)
    return _view(db, list_slots(db, room_id=room_id))


@router.get("/conflicts", response_model=OverlapReport)
def timetable_conflicts(db: Session = Depends(get_db)) -> OverlapReport:
    return ConflictService(list_slots(db)).detect_conflicts()

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from autoslot.api.deps import get_db
from autoslot.schemas.generator import GenerateTimetableRequest, GenerateTimetableResponse
from autoslot.services.auto_generate import GenerationContext, generate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/timetable/auto-generate", response_model=GenerateTimetableResponse)
def auto_generate_timetable(
    payload: GenerateTimetableRequest | None = None,
    db: Session = Depends(get_db),
) -> GenerateTimetableResponse:
    payload = payload or GenerateTimetableRequest()
    result = generate(GenerationContext(db=db), payload)
    if result.total_conflicts:
        logger.info(
            "Timetable generated with conflicts placed=%s conflicts=%s",
            result.total_placed,
            result.total_conflicts,
        )
    return result

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from trainingsheets.database import get_session
from trainingsheets.schemas import TrainingSheetSummary
from trainingsheets.services import sheets
from trainingsheets.services.pagination import parse_category_filter

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


@router.get("/workout-sheets", response_model=list[int])
def list_workout_sheet_ids(session: SessionDep, category_id: str | None = None):
    return sheets.list_sheet_ids(parse_category_filter(category_id), session)


@router.get("/training-schedule/workouts", response_model=list[TrainingSheetSummary])
def list_schedulable_sheets(session: SessionDep):
    return sheets.list_sheet_summaries(session)

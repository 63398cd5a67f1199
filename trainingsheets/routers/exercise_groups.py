from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlmodel import Session

from trainingsheets.config import MAX_ID
from trainingsheets.database import get_session
from trainingsheets.errors import ValidationError
from trainingsheets.schemas import (
    ExerciseGroupPage,
    ExerciseGroupRead,
    ExerciseMethodCreate,
    ExerciseMethodUpdate,
    GroupCreate,
    GroupUpdate,
)
from trainingsheets.services import groups
from trainingsheets.services.graph import get_group_full
from trainingsheets.services.pagination import parse_category_filter, parse_pagination

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]
IdPath = Annotated[int, Path(le=MAX_ID)]


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


@router.get("/exercise-groups", response_model=ExerciseGroupPage)
def list_exercise_groups(
    session: SessionDep,
    page: str | None = None,
    page_size: str | None = None,
    category_id: str | None = None,
):
    pagination = parse_pagination(page, page_size)
    if pagination is None:
        raise ValidationError("page and page_size must be integers within range", field="page")
    category = parse_category_filter(category_id)

    items, total = groups.list_groups(pagination, category, session)
    return ExerciseGroupPage(
        items=items,
        page=pagination.page,
        page_size=pagination.page_size,
        total=total,
    )


@router.post("/exercise-groups", response_model=ExerciseGroupRead, status_code=201)
def create_exercise_group(body: GroupCreate, session: SessionDep):
    return groups.create_group(body, session)


@router.get("/exercise-groups/{id}", response_model=ExerciseGroupRead)
def get_exercise_group(id: IdPath, session: SessionDep):
    group = get_group_full(id, session)
    if group is None:
        raise HTTPException(status_code=404, detail="Exercise group not found")
    return group


@router.put("/exercise-groups/{id}", response_model=ExerciseGroupRead)
def update_exercise_group(id: IdPath, body: GroupUpdate, session: SessionDep):
    return groups.update_group(id, body, session)


@router.delete("/exercise-groups/{id}", status_code=204)
def delete_exercise_group(id: IdPath, session: SessionDep):
    groups.delete_group(id, session)


# ---------------------------------------------------------------------------
# Slots
# ---------------------------------------------------------------------------


@router.post(
    "/exercise-groups/{id}/exercise-methods",
    response_model=ExerciseGroupRead,
    status_code=201,
)
def add_exercise_method(id: IdPath, body: ExerciseMethodCreate, session: SessionDep):
    return groups.add_exercise_method(id, body, session)


@router.patch("/exercise-methods/{id}", response_model=ExerciseGroupRead)
def update_exercise_method(id: IdPath, body: ExerciseMethodUpdate, session: SessionDep):
    return groups.update_exercise_method(id, body, session)


@router.delete("/exercise-methods/{id}", status_code=204)
def delete_exercise_method(id: IdPath, session: SessionDep):
    groups.delete_exercise_method(id, session)

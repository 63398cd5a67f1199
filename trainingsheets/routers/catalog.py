from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlmodel import Session

from trainingsheets.config import MAX_ID
from trainingsheets.database import get_session
from trainingsheets.schemas import (
    CategoryRead,
    ExerciseCreate,
    ExerciseRead,
    ExerciseUpdate,
    MethodCreate,
    MethodRead,
    MethodUpdate,
)
from trainingsheets.services import catalog

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]
IdPath = Annotated[int, Path(le=MAX_ID)]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@router.get("/categories", response_model=list[CategoryRead])
def list_categories(session: SessionDep):
    return catalog.list_categories(session)


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------


@router.get("/exercises", response_model=list[ExerciseRead])
def list_exercises(session: SessionDep):
    return catalog.list_exercises(session)


@router.post("/exercises", response_model=ExerciseRead, status_code=201)
def create_exercise(body: ExerciseCreate, session: SessionDep):
    return catalog.create_exercise(body, session)


@router.get("/exercises/{id}", response_model=ExerciseRead)
def get_exercise(id: IdPath, session: SessionDep):
    return catalog.get_exercise(id, session)


@router.patch("/exercises/{id}", response_model=ExerciseRead)
def update_exercise(id: IdPath, body: ExerciseUpdate, session: SessionDep):
    return catalog.update_exercise(id, body, session)


@router.delete("/exercises/{id}", status_code=204)
def delete_exercise(id: IdPath, session: SessionDep):
    catalog.delete_exercise(id, session)


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


@router.get("/methods", response_model=list[MethodRead])
def list_methods(session: SessionDep):
    return catalog.list_methods(session)


@router.post("/methods", response_model=MethodRead, status_code=201)
def create_method(body: MethodCreate, session: SessionDep):
    return catalog.create_method(body, session)


@router.get("/methods/{id}", response_model=MethodRead)
def get_method(id: IdPath, session: SessionDep):
    return catalog.get_method(id, session)


@router.patch("/methods/{id}", response_model=MethodRead)
def update_method(id: IdPath, body: MethodUpdate, session: SessionDep):
    return catalog.update_method(id, body, session)


@router.delete("/methods/{id}", status_code=204)
def delete_method(id: IdPath, session: SessionDep):
    catalog.delete_method(id, session)

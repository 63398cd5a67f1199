from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlmodel import Session

from trainingsheets.config import MAX_ID
from trainingsheets.database import get_session
from trainingsheets.schemas import (
    ConfigurationCreate,
    ConfigurationUpdate,
    ExerciseConfigurationFullRead,
)
from trainingsheets.services import groups
from trainingsheets.services.graph import get_configuration_full

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]
IdPath = Annotated[int, Path(le=MAX_ID)]


@router.get("", response_model=list[ExerciseConfigurationFullRead])
def list_exercise_configurations(
    session: SessionDep,
    exercise_method_id: Annotated[int | None, Query(gt=0, le=MAX_ID)] = None,
):
    return groups.list_configurations(exercise_method_id, session)


@router.post("", response_model=ExerciseConfigurationFullRead, status_code=201)
def create_exercise_configuration(body: ConfigurationCreate, session: SessionDep):
    return groups.create_configuration(body, session)


@router.get("/{id}", response_model=ExerciseConfigurationFullRead)
def get_exercise_configuration(id: IdPath, session: SessionDep):
    config = get_configuration_full(id, session)
    if config is None:
        raise HTTPException(status_code=404, detail="Exercise configuration not found")
    return config


@router.put("/{id}", response_model=ExerciseConfigurationFullRead)
def update_exercise_configuration(id: IdPath, body: ConfigurationUpdate, session: SessionDep):
    return groups.update_configuration(id, body, session)


@router.delete("/{id}", status_code=204)
def delete_exercise_configuration(id: IdPath, session: SessionDep):
    groups.delete_configuration(id, session)

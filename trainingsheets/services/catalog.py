from sqlmodel import Session, select

from trainingsheets.errors import ConflictError, NotFoundError, ValidationError
from trainingsheets.models import (
    Exercise,
    ExerciseConfiguration,
    ExerciseGroupCategory,
    Method,
    utcnow,
)
from trainingsheets.schemas import ExerciseCreate, ExerciseUpdate, MethodCreate, MethodUpdate
from trainingsheets.services.unit_of_work import UnitOfWork


def _required_text(value: str | None, field: str) -> str:
    """Trim a required text value, rejecting blanks."""
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    return text


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def list_categories(session: Session) -> list[ExerciseGroupCategory]:
    return session.exec(select(ExerciseGroupCategory).order_by(ExerciseGroupCategory.name)).all()


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------


def list_exercises(session: Session) -> list[Exercise]:
    return session.exec(
        select(Exercise).order_by(Exercise.created_at.desc(), Exercise.id.desc())
    ).all()


def get_exercise(exercise_id: int, session: Session) -> Exercise:
    exercise = session.get(Exercise, exercise_id)
    if exercise is None:
        raise NotFoundError("Exercise", exercise_id)
    return exercise


def create_exercise(body: ExerciseCreate, session: Session) -> Exercise:
    exercise = Exercise(
        name=body.name or None,
        description=_required_text(body.description, "description"),
        video_url=body.video_url or None,
        has_method=body.has_method,
    )
    with UnitOfWork(session):
        session.add(exercise)
    session.refresh(exercise)
    return exercise


def update_exercise(exercise_id: int, body: ExerciseUpdate, session: Session) -> Exercise:
    exercise = get_exercise(exercise_id, session)

    fields = body.model_fields_set
    with UnitOfWork(session):
        if "description" in fields:
            exercise.description = _required_text(body.description, "description")
        if "name" in fields:
            exercise.name = body.name
        if "video_url" in fields:
            exercise.video_url = body.video_url
        if body.has_method is not None:
            exercise.has_method = body.has_method
        exercise.updated_at = utcnow()
        session.add(exercise)
    session.refresh(exercise)
    return exercise


def delete_exercise(exercise_id: int, session: Session) -> None:
    exercise = get_exercise(exercise_id, session)
    in_use = session.exec(
        select(ExerciseConfiguration.id).where(ExerciseConfiguration.exercise_id == exercise_id)
    ).first()
    if in_use is not None:
        raise ConflictError("Exercise is used by an exercise configuration")
    with UnitOfWork(session):
        session.delete(exercise)


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


def list_methods(session: Session) -> list[Method]:
    return session.exec(select(Method).order_by(Method.created_at.desc(), Method.id.desc())).all()


def get_method(method_id: int, session: Session) -> Method:
    method = session.get(Method, method_id)
    if method is None:
        raise NotFoundError("Method", method_id)
    return method


def create_method(body: MethodCreate, session: Session) -> Method:
    method = Method(
        name=_required_text(body.name, "name"),
        description=_required_text(body.description, "description"),
    )
    with UnitOfWork(session):
        session.add(method)
    session.refresh(method)
    return method


def update_method(method_id: int, body: MethodUpdate, session: Session) -> Method:
    method = get_method(method_id, session)

    fields = body.model_fields_set
    with UnitOfWork(session):
        if "name" in fields:
            method.name = _required_text(body.name, "name")
        if "description" in fields:
            method.description = _required_text(body.description, "description")
        method.updated_at = utcnow()
        session.add(method)
    session.refresh(method)
    return method


def delete_method(method_id: int, session: Session) -> None:
    method = get_method(method_id, session)
    in_use = session.exec(
        select(ExerciseConfiguration.id).where(ExerciseConfiguration.method_id == method_id)
    ).first()
    if in_use is not None:
        raise ConflictError("Method is used by an exercise configuration")
    with UnitOfWork(session):
        session.delete(method)

from sqlmodel import Session, func, select

from trainingsheets.config import DEFAULT_OBSERVATIONS, DEFAULT_REST
from trainingsheets.errors import ConflictError, NotFoundError, ReferenceNotFoundError
from trainingsheets.models import (
    Exercise,
    ExerciseConfiguration,
    ExerciseGroup,
    ExerciseGroupCategory,
    ExerciseMethod,
    Method,
    TrainingDay,
    utcnow,
)
from trainingsheets.schemas import (
    ConfigurationCreate,
    ConfigurationInput,
    ConfigurationUpdate,
    ExerciseConfigurationFullRead,
    ExerciseGroupRead,
    ExerciseMethodCreate,
    ExerciseMethodUpdate,
    GroupCreate,
    GroupUpdate,
)
from trainingsheets.services.graph import build_group_read, get_configuration_full, get_group_full
from trainingsheets.services.pagination import Pagination
from trainingsheets.services.unit_of_work import UnitOfWork

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_group(group_id: int, session: Session) -> ExerciseGroup:
    group = session.get(ExerciseGroup, group_id)
    if group is None:
        raise NotFoundError("Exercise group", group_id)
    return group


def _get_slot(exercise_method_id: int, session: Session) -> ExerciseMethod:
    slot = session.get(ExerciseMethod, exercise_method_id)
    if slot is None:
        raise NotFoundError("Exercise method", exercise_method_id)
    return slot


def _verify_category_exists(category_id: int, session: Session) -> None:
    if session.get(ExerciseGroupCategory, category_id) is None:
        raise ReferenceNotFoundError("Category", category_id)


def _verify_method_exists(method_id: int, session: Session) -> None:
    if session.get(Method, method_id) is None:
        raise ReferenceNotFoundError("Method", method_id)


def _add_configuration(
    exercise_method_id: int, data: ConfigurationInput, session: Session
) -> ExerciseConfiguration:
    if session.get(Exercise, data.exercise_id) is None:
        raise ReferenceNotFoundError("Exercise", data.exercise_id)
    if data.method_id is not None:
        _verify_method_exists(data.method_id, session)

    config = ExerciseConfiguration(
        exercise_method_id=exercise_method_id,
        exercise_id=data.exercise_id,
        method_id=data.method_id,
        series=data.series,
        reps=data.reps,
    )
    session.add(config)
    return config


def _add_slot(
    group_id: int, order: int, data: ExerciseMethodCreate, session: Session
) -> ExerciseMethod:
    """Write one slot, then its configurations in payload order."""
    slot = ExerciseMethod(
        exercise_group_id=group_id,
        rest=data.rest or DEFAULT_REST,
        observations=data.observations or DEFAULT_OBSERVATIONS,
        order=order,
    )
    session.add(slot)
    session.flush()  # configurations need slot.id

    for config_data in data.exercise_configurations:
        _add_configuration(slot.id, config_data, session)
    return slot


def _delete_slot_cascade(slot: ExerciseMethod, session: Session) -> None:
    configs = session.exec(
        select(ExerciseConfiguration).where(ExerciseConfiguration.exercise_method_id == slot.id)
    ).all()
    for config in configs:
        session.delete(config)
    session.flush()
    session.delete(slot)


def _touch(group: ExerciseGroup, session: Session) -> None:
    group.updated_at = utcnow()
    session.add(group)


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


def list_groups(
    pagination: Pagination, category_id: int | None, session: Session
) -> tuple[list[ExerciseGroupRead], int]:
    """Return one page of full groups plus the total number of matches.

    A None category_id leaves the category predicate out of the query.
    """
    statement = select(ExerciseGroup)
    count_statement = select(func.count()).select_from(ExerciseGroup)
    if category_id is not None:
        statement = statement.where(ExerciseGroup.category_id == category_id)
        count_statement = count_statement.where(ExerciseGroup.category_id == category_id)

    groups = session.exec(
        statement.order_by(ExerciseGroup.created_at.desc(), ExerciseGroup.id.desc())
        .offset(pagination.skip)
        .limit(pagination.page_size)
    ).all()
    total = session.exec(count_statement).one()
    return [build_group_read(g, session) for g in groups], total


def create_group(body: GroupCreate, session: Session) -> ExerciseGroupRead:
    """Create a group with its slots and configurations as one unit.

    Slots get ``order = index + 1`` in payload order. A missing catalog
    reference anywhere in the payload rolls back the whole group.
    """
    with UnitOfWork(session):
        _verify_category_exists(body.category_id, session)

        group = ExerciseGroup(
            name=body.name,
            category_id=body.category_id,
            public_name=body.public_name,
        )
        session.add(group)
        session.flush()

        for index, slot_data in enumerate(body.exercise_methods or []):
            _add_slot(group.id, index + 1, slot_data, session)

    return get_group_full(group.id, session)


def update_group(group_id: int, body: GroupUpdate, session: Session) -> ExerciseGroupRead:
    """Update group metadata only; slots and configurations are left alone."""
    group = _get_group(group_id, session)

    with UnitOfWork(session):
        if body.name is not None:
            group.name = body.name
        if "public_name" in body.model_fields_set:
            group.public_name = body.public_name
        _touch(group, session)

    return get_group_full(group_id, session)


def delete_group(group_id: int, session: Session) -> None:
    """Delete a group with all of its slots and configurations.

    Groups still linked from a training sheet cannot be deleted.
    """
    group = _get_group(group_id, session)

    linked = session.exec(
        select(TrainingDay.id).where(TrainingDay.exercise_group_id == group_id)
    ).first()
    if linked is not None:
        raise ConflictError("Exercise group is used by a training sheet")

    with UnitOfWork(session):
        slots = session.exec(
            select(ExerciseMethod).where(ExerciseMethod.exercise_group_id == group_id)
        ).all()
        for slot in slots:
            _delete_slot_cascade(slot, session)
            session.flush()
        session.delete(group)


# ---------------------------------------------------------------------------
# Slots (ExerciseMethod)
# ---------------------------------------------------------------------------


def add_exercise_method(
    group_id: int, body: ExerciseMethodCreate, session: Session
) -> ExerciseGroupRead:
    """Append a slot after the group's current last slot."""
    group = _get_group(group_id, session)

    with UnitOfWork(session):
        last_order = session.exec(
            select(func.max(ExerciseMethod.order)).where(
                ExerciseMethod.exercise_group_id == group_id
            )
        ).one()
        _add_slot(group_id, (last_order or 0) + 1, body, session)
        _touch(group, session)

    return get_group_full(group_id, session)


def update_exercise_method(
    exercise_method_id: int, body: ExerciseMethodUpdate, session: Session
) -> ExerciseGroupRead:
    slot = _get_slot(exercise_method_id, session)
    group_id = slot.exercise_group_id

    with UnitOfWork(session):
        if body.rest is not None:
            slot.rest = body.rest
        if body.observations is not None:
            slot.observations = body.observations
        session.add(slot)
        _touch(_get_group(group_id, session), session)

    return get_group_full(group_id, session)


def delete_exercise_method(exercise_method_id: int, session: Session) -> None:
    """Remove one slot and its configurations. Remaining orders are kept as-is."""
    slot = _get_slot(exercise_method_id, session)
    group = _get_group(slot.exercise_group_id, session)
    with UnitOfWork(session):
        _delete_slot_cascade(slot, session)
        _touch(group, session)


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


def list_configurations(
    exercise_method_id: int | None, session: Session
) -> list[ExerciseConfigurationFullRead]:
    statement = select(ExerciseConfiguration.id).order_by(ExerciseConfiguration.id)
    if exercise_method_id is not None:
        statement = statement.where(ExerciseConfiguration.exercise_method_id == exercise_method_id)
    return [get_configuration_full(config_id, session) for config_id in session.exec(statement).all()]


def create_configuration(
    body: ConfigurationCreate, session: Session
) -> ExerciseConfigurationFullRead:
    if session.get(ExerciseMethod, body.exercise_method_id) is None:
        raise ReferenceNotFoundError("Exercise method", body.exercise_method_id)

    with UnitOfWork(session):
        config = _add_configuration(body.exercise_method_id, body, session)

    return get_configuration_full(config.id, session)


def update_configuration(
    configuration_id: int, body: ConfigurationUpdate, session: Session
) -> ExerciseConfigurationFullRead:
    config = session.get(ExerciseConfiguration, configuration_id)
    if config is None:
        raise NotFoundError("Exercise configuration", configuration_id)

    with UnitOfWork(session):
        if body.series is not None:
            config.series = body.series
        if body.reps is not None:
            config.reps = body.reps
        if "method_id" in body.model_fields_set:
            if body.method_id is not None:
                _verify_method_exists(body.method_id, session)
            config.method_id = body.method_id
        session.add(config)

    return get_configuration_full(configuration_id, session)


def delete_configuration(configuration_id: int, session: Session) -> None:
    config = session.get(ExerciseConfiguration, configuration_id)
    if config is None:
        raise NotFoundError("Exercise configuration", configuration_id)
    with UnitOfWork(session):
        session.delete(config)

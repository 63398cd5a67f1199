"""Reconstruct the canonical full graph of groups, configurations and sheets.

Every read path and every write path returns through these functions, so a
group looks the same whether it was just created, updated or fetched.

Expanded relations:

    group -> category
          -> exercise_methods (order ASC, id ASC)
             -> exercise_configurations (id ASC) -> exercise, method
    sheet -> training_days (day ASC, id ASC) -> group -> ...
    configuration -> exercise, method, exercise_method (summary)
"""

from sqlmodel import Session, select

from trainingsheets.models import (
    Exercise,
    ExerciseConfiguration,
    ExerciseGroup,
    ExerciseGroupCategory,
    ExerciseMethod,
    Method,
    TrainingDay,
    TrainingSheet,
)
from trainingsheets.schemas import (
    CategoryRead,
    ExerciseConfigurationFullRead,
    ExerciseConfigurationRead,
    ExerciseGroupRead,
    ExerciseMethodRead,
    ExerciseMethodSummary,
    ExerciseRead,
    MethodRead,
    TrainingDayRead,
    TrainingSheetRead,
)

# ---------------------------------------------------------------------------
# Leaf builders
# ---------------------------------------------------------------------------


def build_exercise_read(exercise: Exercise) -> ExerciseRead:
    return ExerciseRead(
        id=exercise.id,
        name=exercise.name,
        description=exercise.description,
        video_url=exercise.video_url,
        has_method=exercise.has_method,
        created_at=exercise.created_at,
    )


def build_method_read(method: Method) -> MethodRead:
    return MethodRead(
        id=method.id,
        name=method.name,
        description=method.description,
        created_at=method.created_at,
    )


def _build_method_summary(slot: ExerciseMethod) -> ExerciseMethodSummary:
    return ExerciseMethodSummary(
        id=slot.id,
        exercise_group_id=slot.exercise_group_id,
        rest=slot.rest,
        observations=slot.observations,
        order=slot.order,
    )


def _configuration_fields(config: ExerciseConfiguration, session: Session) -> dict:
    exercise = session.get(Exercise, config.exercise_id)
    method = session.get(Method, config.method_id) if config.method_id is not None else None
    return {
        "id": config.id,
        "exercise_method_id": config.exercise_method_id,
        "exercise_id": config.exercise_id,
        "method_id": config.method_id,
        "series": config.series,
        "reps": config.reps,
        "exercise": build_exercise_read(exercise),
        "method": build_method_read(method) if method is not None else None,
    }


# ---------------------------------------------------------------------------
# Composite builders
# ---------------------------------------------------------------------------


def _build_exercise_method_read(slot: ExerciseMethod, session: Session) -> ExerciseMethodRead:
    configs = session.exec(
        select(ExerciseConfiguration)
        .where(ExerciseConfiguration.exercise_method_id == slot.id)
        .order_by(ExerciseConfiguration.id)
    ).all()
    return ExerciseMethodRead(
        id=slot.id,
        exercise_group_id=slot.exercise_group_id,
        rest=slot.rest,
        observations=slot.observations,
        order=slot.order,
        exercise_configurations=[
            ExerciseConfigurationRead(**_configuration_fields(c, session)) for c in configs
        ],
    )


def build_group_read(group: ExerciseGroup, session: Session) -> ExerciseGroupRead:
    category = session.get(ExerciseGroupCategory, group.category_id)
    slots = session.exec(
        select(ExerciseMethod)
        .where(ExerciseMethod.exercise_group_id == group.id)
        .order_by(ExerciseMethod.order, ExerciseMethod.id)
    ).all()
    return ExerciseGroupRead(
        id=group.id,
        name=group.name,
        public_name=group.public_name,
        category_id=group.category_id,
        category=CategoryRead(id=category.id, name=category.name) if category else None,
        created_at=group.created_at,
        updated_at=group.updated_at,
        exercise_methods=[_build_exercise_method_read(s, session) for s in slots],
    )


def build_sheet_read(sheet: TrainingSheet, session: Session) -> TrainingSheetRead:
    days = session.exec(
        select(TrainingDay)
        .where(TrainingDay.training_sheet_id == sheet.id)
        .order_by(TrainingDay.day, TrainingDay.id)
    ).all()

    # Several days may link the same group; build each group once
    groups: dict[int, ExerciseGroupRead] = {}
    day_reads: list[TrainingDayRead] = []
    for day in days:
        if day.exercise_group_id not in groups:
            group = session.get(ExerciseGroup, day.exercise_group_id)
            groups[day.exercise_group_id] = build_group_read(group, session)
        day_reads.append(
            TrainingDayRead(
                id=day.id,
                day=day.day,
                short_name=day.short_name,
                training_sheet_id=day.training_sheet_id,
                exercise_group_id=day.exercise_group_id,
                exercise_group=groups[day.exercise_group_id],
            )
        )

    return TrainingSheetRead(
        id=sheet.id,
        name=sheet.name,
        public_name=sheet.public_name,
        slug=sheet.slug,
        pdf_path=sheet.pdf_path,
        created_at=sheet.created_at,
        updated_at=sheet.updated_at,
        training_days=day_reads,
    )


# ---------------------------------------------------------------------------
# Public accessors
# ---------------------------------------------------------------------------


def get_group_full(group_id: int, session: Session) -> ExerciseGroupRead | None:
    group = session.get(ExerciseGroup, group_id)
    if group is None:
        return None
    return build_group_read(group, session)


def get_configuration_full(
    configuration_id: int, session: Session
) -> ExerciseConfigurationFullRead | None:
    config = session.get(ExerciseConfiguration, configuration_id)
    if config is None:
        return None
    slot = session.get(ExerciseMethod, config.exercise_method_id)
    return ExerciseConfigurationFullRead(
        **_configuration_fields(config, session),
        exercise_method=_build_method_summary(slot),
    )


def get_sheet_full(sheet_id: int, session: Session) -> TrainingSheetRead | None:
    sheet = session.get(TrainingSheet, sheet_id)
    if sheet is None:
        return None
    return build_sheet_read(sheet, session)

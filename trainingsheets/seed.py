"""
Seed the database with a small catalog and a few composed groups and sheets.
Run with: python -m trainingsheets.seed

WARNING: Drops all existing data before inserting.
"""

from sqlmodel import Session, SQLModel, select

from trainingsheets.database import engine
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
    ConfigurationInput,
    ExerciseMethodCreate,
    GroupCreate,
    SheetCreate,
    TrainingDayInput,
)
from trainingsheets.services.groups import create_group
from trainingsheets.services.sheets import create_sheet

# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

CATEGORIES = ["General", "Upper Body", "Lower Body", "Full Body", "Conditioning"]

# name -> description
EXERCISES: dict[str, str] = {
    "Bench Press": "Compound chest exercise",
    "Squat": "Compound leg exercise",
    "Deadlift": "Posterior chain compound lift",
    "Pull-up": "Bodyweight vertical pull",
    "Overhead Press": "Standing barbell shoulder press",
    "Barbell Row": "Horizontal pull for the upper back",
    "Leg Press": "Machine quad and glute press",
    "Romanian Deadlift": "Hip hinge for the hamstrings",
    "Plank": "Isometric core hold",
}

METHODS: dict[str, str] = {
    "Drop Set": "Reduce the load after failure and keep going",
    "Rest-Pause": "Short pauses inside one extended set",
    "Bi-Set": "Two exercises back to back without rest",
}

# group name -> (category, [(rest, [(exercise, method, series, reps), ...]), ...])
GROUPS: dict[str, tuple[str, list[tuple[str | None, list[tuple[str, str | None, str, str]]]]]] = {
    "Push A": (
        "Upper Body",
        [
            ("90s", [("Bench Press", None, "4", "8-10")]),
            (None, [("Overhead Press", "Rest-Pause", "3", "10")]),
        ],
    ),
    "Pull A": (
        "Upper Body",
        [
            ("90s", [("Pull-up", None, "4", "max")]),
            (None, [("Barbell Row", "Drop Set", "3", "12")]),
        ],
    ),
    "Legs A": (
        "Lower Body",
        [
            ("120s", [("Squat", None, "5", "5")]),
            ("90s", [("Leg Press", "Bi-Set", "3", "12"), ("Romanian Deadlift", "Bi-Set", "3", "12")]),
            ("30s", [("Plank", None, "3", "45s")]),
        ],
    ),
}

# sheet name -> (slug, [group name per day])
SHEETS: dict[str, tuple[str, list[str]]] = {
    "Beginner Split": ("beginner-split", ["Push A", "Legs A", "Pull A"]),
    "Upper Focus": ("upper-focus", ["Push A", "Pull A", "Push A", "Pull A"]),
}


def seed() -> None:
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        # ------------------------------------------------------------------
        # Wipe existing data (order matters for FK constraints)
        # ------------------------------------------------------------------
        for model in [
            TrainingDay,
            TrainingSheet,
            ExerciseConfiguration,
            ExerciseMethod,
            ExerciseGroup,
            ExerciseGroupCategory,
            Method,
            Exercise,
        ]:
            for row in session.exec(select(model)).all():
                session.delete(row)
            session.flush()
        session.commit()
        print("Cleared existing data.")

        category_map: dict[str, ExerciseGroupCategory] = {}
        for name in CATEGORIES:
            category = ExerciseGroupCategory(name=name)
            session.add(category)
            category_map[name] = category

        exercise_map: dict[str, Exercise] = {}
        for name, description in EXERCISES.items():
            exercise = Exercise(name=name, description=description)
            session.add(exercise)
            exercise_map[name] = exercise

        method_map: dict[str, Method] = {}
        for name, description in METHODS.items():
            method = Method(name=name, description=description)
            session.add(method)
            method_map[name] = method

        session.commit()
        print(
            f"Created {len(category_map)} categories, {len(exercise_map)} exercises "
            f"and {len(method_map)} methods."
        )

        # ------------------------------------------------------------------
        # Groups and sheets go through the composer, like any client write
        # ------------------------------------------------------------------
        group_ids: dict[str, int] = {}
        for group_name, (category_name, slots) in GROUPS.items():
            body = GroupCreate(
                name=group_name,
                category_id=category_map[category_name].id,
                exercise_methods=[
                    ExerciseMethodCreate(
                        rest=rest,
                        exercise_configurations=[
                            ConfigurationInput(
                                exercise_id=exercise_map[exercise].id,
                                method_id=method_map[method].id if method else None,
                                series=series,
                                reps=reps,
                            )
                            for exercise, method, series, reps in configs
                        ],
                    )
                    for rest, configs in slots
                ],
            )
            group_ids[group_name] = create_group(body, session).id
        print(f"Created {len(group_ids)} exercise groups.")

        for sheet_name, (slug, day_groups) in SHEETS.items():
            create_sheet(
                SheetCreate(
                    name=sheet_name,
                    public_name=sheet_name,
                    slug=slug,
                    training_days=[
                        TrainingDayInput(exercise_group_id=group_ids[g], short_name=g)
                        for g in day_groups
                    ],
                ),
                session,
            )
        print(f"Created {len(SHEETS)} training sheets.")
        print("Seed complete!")


if __name__ == "__main__":
    seed()

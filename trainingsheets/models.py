from datetime import datetime, timezone

from sqlmodel import Field, SQLModel

from trainingsheets.config import DEFAULT_OBSERVATIONS, DEFAULT_REST


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class ExerciseGroupCategory(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow)


class Exercise(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    name: str | None = None
    description: str
    video_url: str | None = None
    has_method: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Method(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    name: str
    description: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


# ---------------------------------------------------------------------------
# Exercise groups
# ---------------------------------------------------------------------------


class ExerciseGroup(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    name: str
    public_name: str | None = None
    category_id: int = Field(foreign_key="exercisegroupcategory.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ExerciseMethod(SQLModel, table=True):
    """An ordered slot inside an exercise group."""

    id: int | None = Field(default=None, primary_key=True)
    exercise_group_id: int = Field(foreign_key="exercisegroup.id", index=True)
    rest: str = DEFAULT_REST
    observations: str = DEFAULT_OBSERVATIONS
    order: int  # 1-based, assigned once at creation
    created_at: datetime = Field(default_factory=utcnow)


class ExerciseConfiguration(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    exercise_method_id: int = Field(foreign_key="exercisemethod.id", index=True)
    exercise_id: int = Field(foreign_key="exercise.id")
    method_id: int | None = Field(default=None, foreign_key="method.id")
    series: str
    reps: str
    created_at: datetime = Field(default_factory=utcnow)


# ---------------------------------------------------------------------------
# Training sheets
# ---------------------------------------------------------------------------


class TrainingSheet(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    name: str
    public_name: str | None = None
    slug: str | None = Field(default=None, unique=True)
    pdf_path: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TrainingDay(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    training_sheet_id: int = Field(foreign_key="trainingsheet.id", index=True)
    exercise_group_id: int = Field(foreign_key="exercisegroup.id", index=True)
    day: int  # 1-based position within the sheet
    short_name: str | None = None

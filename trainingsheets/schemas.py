from datetime import datetime

from sqlmodel import Field, SQLModel

from trainingsheets.config import MAX_ID

# ---------------------------------------------------------------------------
# Read schemas (the canonical "full" shape)
# ---------------------------------------------------------------------------


class CategoryRead(SQLModel):
    id: int
    name: str


class ExerciseRead(SQLModel):
    id: int
    name: str | None
    description: str
    video_url: str | None
    has_method: bool
    created_at: datetime


class MethodRead(SQLModel):
    id: int
    name: str
    description: str
    created_at: datetime


class ExerciseConfigurationRead(SQLModel):
    id: int
    exercise_method_id: int
    exercise_id: int
    method_id: int | None
    series: str
    reps: str
    exercise: ExerciseRead
    method: MethodRead | None


class ExerciseMethodSummary(SQLModel):
    id: int
    exercise_group_id: int
    rest: str
    observations: str
    order: int


class ExerciseMethodRead(ExerciseMethodSummary):
    exercise_configurations: list[ExerciseConfigurationRead]


class ExerciseConfigurationFullRead(ExerciseConfigurationRead):
    exercise_method: ExerciseMethodSummary


class ExerciseGroupRead(SQLModel):
    id: int
    name: str
    public_name: str | None
    category_id: int
    category: CategoryRead | None
    created_at: datetime
    updated_at: datetime
    exercise_methods: list[ExerciseMethodRead]


class TrainingDayRead(SQLModel):
    id: int
    day: int
    short_name: str | None
    training_sheet_id: int
    exercise_group_id: int
    exercise_group: ExerciseGroupRead


class TrainingSheetRead(SQLModel):
    id: int
    name: str
    public_name: str | None
    slug: str | None
    pdf_path: str | None
    created_at: datetime
    updated_at: datetime
    training_days: list[TrainingDayRead]


class TrainingSheetSummary(SQLModel):
    id: int
    name: str
    public_name: str | None
    slug: str | None
    pdf_path: str | None


class ExerciseGroupPage(SQLModel):
    items: list[ExerciseGroupRead]
    page: int
    page_size: int
    total: int


class TrainingSheetPage(SQLModel):
    items: list[TrainingSheetRead]
    page: int
    page_size: int
    total: int


# ---------------------------------------------------------------------------
# Catalog request schemas
# ---------------------------------------------------------------------------


class ExerciseCreate(SQLModel):
    name: str | None = None
    description: str
    video_url: str | None = None
    has_method: bool = True


class ExerciseUpdate(SQLModel):
    name: str | None = None
    description: str | None = None
    video_url: str | None = None
    has_method: bool | None = None


class MethodCreate(SQLModel):
    name: str
    description: str


class MethodUpdate(SQLModel):
    name: str | None = None
    description: str | None = None


# ---------------------------------------------------------------------------
# Group request schemas
# ---------------------------------------------------------------------------


class ConfigurationInput(SQLModel):
    exercise_id: int = Field(gt=0, le=MAX_ID)
    method_id: int | None = Field(default=None, gt=0, le=MAX_ID)
    series: str = Field(min_length=1)
    reps: str = Field(min_length=1)


class ExerciseMethodCreate(SQLModel):
    rest: str | None = None
    observations: str | None = None
    exercise_configurations: list[ConfigurationInput]


class ExerciseMethodUpdate(SQLModel):
    rest: str | None = Field(default=None, min_length=1)
    observations: str | None = None


class GroupCreate(SQLModel):
    name: str = Field(min_length=1)
    category_id: int = Field(gt=0, le=MAX_ID)
    public_name: str | None = None
    exercise_methods: list[ExerciseMethodCreate] | None = None


class GroupUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1)
    public_name: str | None = None


class ConfigurationCreate(ConfigurationInput):
    exercise_method_id: int = Field(gt=0, le=MAX_ID)


class ConfigurationUpdate(SQLModel):
    series: str | None = Field(default=None, min_length=1)
    reps: str | None = Field(default=None, min_length=1)
    # An explicit null clears the method; leaving the key out keeps it
    method_id: int | None = Field(default=None, gt=0, le=MAX_ID)


# ---------------------------------------------------------------------------
# Sheet request schemas
# ---------------------------------------------------------------------------


class TrainingDayInput(SQLModel):
    exercise_group_id: int = Field(gt=0, le=MAX_ID)
    short_name: str | None = None


class SheetCreate(SQLModel):
    name: str = Field(min_length=1)
    public_name: str | None = None
    slug: str | None = Field(default=None, min_length=1)
    pdf_path: str | None = None
    training_days: list[TrainingDayInput]


class SheetUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1)
    public_name: str | None = None
    slug: str | None = Field(default=None, min_length=1)
    pdf_path: str | None = None
    training_days: list[TrainingDayInput] | None = None

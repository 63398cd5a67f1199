from sqlmodel import Session, func, select

from trainingsheets.config import MAX_PDF_BYTES
from trainingsheets.errors import (
    ConflictError,
    NotFoundError,
    ReferenceNotFoundError,
    TrainingSheetsError,
    ValidationError,
)
from trainingsheets.models import ExerciseGroup, TrainingDay, TrainingSheet, utcnow
from trainingsheets.schemas import (
    SheetCreate,
    SheetUpdate,
    TrainingDayInput,
    TrainingSheetRead,
    TrainingSheetSummary,
)
from trainingsheets.services.graph import build_sheet_read, get_sheet_full
from trainingsheets.services.pagination import Pagination
from trainingsheets.services.storage import LocalFileStorage
from trainingsheets.services.unit_of_work import UnitOfWork

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_sheet(sheet_id: int, session: Session) -> TrainingSheet:
    sheet = session.get(TrainingSheet, sheet_id)
    if sheet is None:
        raise NotFoundError("Training sheet", sheet_id)
    return sheet


def _verify_slug_available(slug: str, session: Session, sheet_id: int | None = None) -> None:
    owner_id = session.exec(select(TrainingSheet.id).where(TrainingSheet.slug == slug)).first()
    if owner_id is not None and owner_id != sheet_id:
        raise ConflictError(f"Slug '{slug}' is already in use")


def _add_days(sheet_id: int, days: list[TrainingDayInput], session: Session) -> None:
    """Link existing groups to the sheet; list position becomes the day number."""
    for index, day in enumerate(days):
        if session.get(ExerciseGroup, day.exercise_group_id) is None:
            raise ReferenceNotFoundError("Exercise group", day.exercise_group_id)
        session.add(
            TrainingDay(
                training_sheet_id=sheet_id,
                exercise_group_id=day.exercise_group_id,
                day=index + 1,
                short_name=day.short_name,
            )
        )


def _delete_days(sheet_id: int, session: Session) -> None:
    days = session.exec(select(TrainingDay).where(TrainingDay.training_sheet_id == sheet_id)).all()
    for day in days:
        session.delete(day)
    session.flush()


def _category_filter(category_id: int):
    """Sheets with at least one day whose group belongs to the category."""
    return TrainingSheet.id.in_(
        select(TrainingDay.training_sheet_id)
        .join(ExerciseGroup, ExerciseGroup.id == TrainingDay.exercise_group_id)
        .where(ExerciseGroup.category_id == category_id)
    )


def _build_summary(sheet: TrainingSheet) -> TrainingSheetSummary:
    return TrainingSheetSummary(
        id=sheet.id,
        name=sheet.name,
        public_name=sheet.public_name,
        slug=sheet.slug,
        pdf_path=sheet.pdf_path,
    )


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


def list_sheets(
    pagination: Pagination, category_id: int | None, session: Session
) -> tuple[list[TrainingSheetRead], int]:
    statement = select(TrainingSheet)
    count_statement = select(func.count()).select_from(TrainingSheet)
    if category_id is not None:
        statement = statement.where(_category_filter(category_id))
        count_statement = count_statement.where(_category_filter(category_id))

    sheets = session.exec(
        statement.order_by(TrainingSheet.created_at.desc(), TrainingSheet.id.desc())
        .offset(pagination.skip)
        .limit(pagination.page_size)
    ).all()
    total = session.exec(count_statement).one()
    return [build_sheet_read(s, session) for s in sheets], total


def list_sheet_ids(category_id: int | None, session: Session) -> list[int]:
    """Ids of every sheet, newest first, optionally scoped to a category."""
    statement = select(TrainingSheet.id)
    if category_id is not None:
        statement = statement.where(_category_filter(category_id))
    return list(
        session.exec(
            statement.order_by(TrainingSheet.created_at.desc(), TrainingSheet.id.desc())
        ).all()
    )


def list_sheet_summaries(session: Session) -> list[TrainingSheetSummary]:
    sheets = session.exec(
        select(TrainingSheet).order_by(TrainingSheet.created_at.desc(), TrainingSheet.id.desc())
    ).all()
    return [_build_summary(s) for s in sheets]


def get_sheet_by_slug(slug: str, session: Session) -> TrainingSheetSummary:
    sheet = session.exec(select(TrainingSheet).where(TrainingSheet.slug == slug)).first()
    if sheet is None:
        raise NotFoundError("Training sheet", slug)
    return _build_summary(sheet)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def create_sheet(body: SheetCreate, session: Session) -> TrainingSheetRead:
    """Create a sheet and link its days to existing groups, all or nothing."""
    with UnitOfWork(session):
        if body.slug is not None:
            _verify_slug_available(body.slug, session)

        sheet = TrainingSheet(
            name=body.name,
            public_name=body.public_name,
            slug=body.slug,
            pdf_path=body.pdf_path,
        )
        session.add(sheet)
        session.flush()

        _add_days(sheet.id, body.training_days, session)

    return get_sheet_full(sheet.id, session)


def update_sheet(
    sheet_id: int, body: SheetUpdate, session: Session, storage: LocalFileStorage
) -> TrainingSheetRead:
    """Apply a partial metadata update.

    When ``pdf_path`` changes, the previously stored file is released before
    the new path is committed. ``training_days``, when given, replaces every
    day link of the sheet.
    """
    sheet = _get_sheet(sheet_id, session)
    fields = body.model_fields_set

    with UnitOfWork(session):
        if body.name is not None:
            sheet.name = body.name
        if "public_name" in fields:
            sheet.public_name = body.public_name
        if "slug" in fields:
            if body.slug is not None:
                _verify_slug_available(body.slug, session, sheet_id)
            sheet.slug = body.slug
        if body.training_days is not None:
            _delete_days(sheet_id, session)
            _add_days(sheet_id, body.training_days, session)

        # Last step before commit, so a rejected update never loses the file
        if "pdf_path" in fields and body.pdf_path != sheet.pdf_path:
            if sheet.pdf_path:
                storage.delete(sheet.pdf_path)
            sheet.pdf_path = body.pdf_path

        sheet.updated_at = utcnow()
        session.add(sheet)

    return get_sheet_full(sheet_id, session)


def replace_sheet_pdf(
    sheet_id: int, filename: str, data: bytes, session: Session, storage: LocalFileStorage
) -> TrainingSheetRead:
    """Store a new PDF for the sheet, releasing the old one first."""
    if not data:
        raise ValidationError("PDF file is empty", field="file")
    if len(data) > MAX_PDF_BYTES:
        raise ValidationError(f"PDF file exceeds {MAX_PDF_BYTES} bytes", field="file")

    sheet = _get_sheet(sheet_id, session)
    new_path = storage.save(filename, data)

    try:
        with UnitOfWork(session):
            if sheet.pdf_path:
                storage.delete(sheet.pdf_path)
            sheet.pdf_path = new_path
            sheet.updated_at = utcnow()
            session.add(sheet)
    except TrainingSheetsError:
        storage.delete(new_path)
        raise

    return get_sheet_full(sheet_id, session)


def delete_sheet(sheet_id: int, session: Session, storage: LocalFileStorage) -> None:
    """Delete the sheet and its day links. Linked groups are left untouched."""
    sheet = _get_sheet(sheet_id, session)
    pdf_path = sheet.pdf_path

    with UnitOfWork(session):
        _delete_days(sheet_id, session)
        session.delete(sheet)

    if pdf_path:
        storage.delete(pdf_path)

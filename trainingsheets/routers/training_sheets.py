from typing import Annotated

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Path
from sqlmodel import Session

from trainingsheets.config import MAX_ID, PDF_MEDIA_TYPE
from trainingsheets.database import get_session
from trainingsheets.errors import ValidationError
from trainingsheets.schemas import (
    SheetCreate,
    SheetUpdate,
    TrainingSheetPage,
    TrainingSheetRead,
    TrainingSheetSummary,
)
from trainingsheets.services import sheets
from trainingsheets.services.graph import get_sheet_full
from trainingsheets.services.pagination import parse_category_filter, parse_pagination
from trainingsheets.services.storage import LocalFileStorage, get_storage

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]
IdPath = Annotated[int, Path(le=MAX_ID)]
StorageDep = Annotated[LocalFileStorage, Depends(get_storage)]


@router.get("", response_model=TrainingSheetPage)
def list_training_sheets(
    session: SessionDep,
    page: str | None = None,
    page_size: str | None = None,
    category_id: str | None = None,
):
    pagination = parse_pagination(page, page_size)
    if pagination is None:
        raise ValidationError("page and page_size must be integers within range", field="page")
    category = parse_category_filter(category_id)

    items, total = sheets.list_sheets(pagination, category, session)
    return TrainingSheetPage(
        items=items,
        page=pagination.page,
        page_size=pagination.page_size,
        total=total,
    )


@router.post("", response_model=TrainingSheetRead, status_code=201)
def create_training_sheet(body: SheetCreate, session: SessionDep):
    return sheets.create_sheet(body, session)


@router.get("/by-slug/{slug}", response_model=TrainingSheetSummary)
def get_training_sheet_by_slug(slug: str, session: SessionDep):
    return sheets.get_sheet_by_slug(slug, session)


@router.get("/{id}", response_model=TrainingSheetRead)
def get_training_sheet(id: IdPath, session: SessionDep):
    sheet = get_sheet_full(id, session)
    if sheet is None:
        raise HTTPException(status_code=404, detail="Training sheet not found")
    return sheet


@router.put("/{id}", response_model=TrainingSheetRead)
def update_training_sheet(id: IdPath, body: SheetUpdate, session: SessionDep, storage: StorageDep):
    return sheets.update_sheet(id, body, session, storage)


@router.put("/{id}/pdf", response_model=TrainingSheetRead)
def upload_training_sheet_pdf(
    id: IdPath,
    session: SessionDep,
    storage: StorageDep,
    data: Annotated[bytes, Body(media_type=PDF_MEDIA_TYPE)],
    content_type: Annotated[str, Header()] = "",
    filename: str = "training-sheet.pdf",
):
    """Replace the sheet's PDF with the raw request body."""
    if content_type.split(";")[0].strip() != PDF_MEDIA_TYPE:
        raise ValidationError("Only application/pdf uploads are accepted", field="file")
    return sheets.replace_sheet_pdf(id, filename, data, session, storage)


@router.delete("/{id}", status_code=204)
def delete_training_sheet(id: IdPath, session: SessionDep, storage: StorageDep):
    sheets.delete_sheet(id, session, storage)

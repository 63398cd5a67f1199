from dataclasses import dataclass

from trainingsheets.config import (
    ALL_CATEGORIES,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_ID,
    MAX_PAGE_SIZE,
)
from trainingsheets.errors import ValidationError


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int
    skip: int


def parse_pagination(page: str | None = None, page_size: str | None = None) -> Pagination | None:
    """Normalize raw page/page_size query values.

    Missing values fall back to the defaults, out-of-range values are clamped.
    Returns None when either value is present but not an integer, or when the
    page lies beyond the largest offset the database can address; callers
    must report that as a validation error instead of applying defaults.
    """
    try:
        page_num = DEFAULT_PAGE if page is None else int(page.strip())
        size = DEFAULT_PAGE_SIZE if page_size is None else int(page_size.strip())
    except ValueError:
        return None

    page_num = max(page_num, 1)
    size = min(max(size, 1), MAX_PAGE_SIZE)
    if (page_num - 1) * size > MAX_ID:
        return None
    return Pagination(page=page_num, page_size=size, skip=(page_num - 1) * size)


def parse_category_filter(category_id: str | None = None) -> int | None:
    """Return the category id to filter on, or None for "no filter"."""
    if not category_id or category_id == ALL_CATEGORIES:
        return None
    try:
        parsed = int(category_id.strip())
    except ValueError:
        raise ValidationError("Invalid category_id", field="category_id")
    if parsed <= 0 or parsed > MAX_ID:
        raise ValidationError("category_id must be a positive 64-bit integer", field="category_id")
    return parsed

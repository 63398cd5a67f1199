import os
from pathlib import Path

DATABASE_URL = os.getenv("TRAINING_SHEETS_DATABASE_URL", "sqlite:///training_sheets.db")

# Stored PDFs live under UPLOAD_DIR and are addressed by their public path
UPLOAD_DIR = Path(os.getenv("TRAINING_SHEETS_UPLOAD_DIR", "uploads/pdfs"))
UPLOAD_URL_PREFIX = "/uploads/pdfs"
MAX_PDF_BYTES = int(os.getenv("TRAINING_SHEETS_MAX_PDF_BYTES", str(10 * 1024 * 1024)))
PDF_MEDIA_TYPE = "application/pdf"

LOG_LEVEL = os.getenv("TRAINING_SHEETS_LOG_LEVEL", "INFO")

DEFAULT_REST = "60s"
DEFAULT_OBSERVATIONS = ""

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Sentinel accepted by list endpoints meaning "do not filter by category"
ALL_CATEGORIES = "all"

# Largest id or offset SQLite can bind as an INTEGER
MAX_ID = 2**63 - 1

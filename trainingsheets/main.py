import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

import trainingsheets.models as _models  # noqa: F401  (registers tables with SQLModel metadata)
from trainingsheets.config import LOG_LEVEL
from trainingsheets.database import create_db_and_tables
from trainingsheets.errors import TrainingSheetsError, ValidationError
from trainingsheets.routers import (
    catalog,
    exercise_configurations,
    exercise_groups,
    schedule,
    training_sheets,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Training Sheets", lifespan=lifespan)

app.include_router(catalog.router, prefix="/api", tags=["catalog"])
app.include_router(exercise_groups.router, prefix="/api", tags=["exercise-groups"])
app.include_router(
    exercise_configurations.router,
    prefix="/api/exercise-configurations",
    tags=["exercise-configurations"],
)
app.include_router(training_sheets.router, prefix="/api/training-sheets", tags=["training-sheets"])
app.include_router(schedule.router, prefix="/api", tags=["schedule"])


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@app.exception_handler(TrainingSheetsError)
async def handle_engine_error(request: Request, exc: TrainingSheetsError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)

    body = {"detail": exc.message}
    if isinstance(exc, ValidationError) and exc.field is not None:
        body["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    logger.info("%s %s rejected: invalid request body", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from trainingsheets.database import get_session
from trainingsheets.main import app
from trainingsheets.models import Exercise, ExerciseGroupCategory, Method
from trainingsheets.services.storage import LocalFileStorage, get_storage


@pytest.fixture(name="session")
def session_fixture():
    # StaticPool ensures the in-memory DB is shared across all connections,
    # including those spawned by TestClient's anyio thread pool.
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="storage")
def storage_fixture(tmp_path):
    return LocalFileStorage(root=tmp_path / "pdfs")


@pytest.fixture(name="client")
def client_fixture(session: Session, storage: LocalFileStorage):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@dataclass
class CatalogIds:
    upper_body: int
    lower_body: int
    bench_press: int
    squat: int
    pull_up: int
    drop_set: int
    rest_pause: int


@pytest.fixture(name="catalog")
def catalog_fixture(session: Session) -> CatalogIds:
    """A small committed catalog shared by the composer tests."""
    rows = {
        "upper_body": ExerciseGroupCategory(name="Upper Body"),
        "lower_body": ExerciseGroupCategory(name="Lower Body"),
        "bench_press": Exercise(name="Bench Press", description="Compound chest exercise"),
        "squat": Exercise(name="Squat", description="Compound leg exercise"),
        "pull_up": Exercise(name="Pull-up", description="Bodyweight vertical pull"),
        "drop_set": Method(name="Drop Set", description="Reduce the load and continue"),
        "rest_pause": Method(name="Rest-Pause", description="Short pauses inside one set"),
    }
    session.add_all(rows.values())
    session.commit()
    return CatalogIds(**{key: row.id for key, row in rows.items()})

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from trainingsheets.errors import ConflictError, NotFoundError, StorageError, ValidationError
from trainingsheets.models import Exercise, ExerciseGroupCategory
from trainingsheets.schemas import (
    ConfigurationInput,
    ExerciseCreate,
    ExerciseMethodCreate,
    ExerciseUpdate,
    GroupCreate,
    MethodCreate,
    MethodUpdate,
)
from trainingsheets.services.catalog import (
    create_exercise,
    create_method,
    delete_exercise,
    delete_method,
    get_exercise,
    get_method,
    list_categories,
    update_exercise,
    update_method,
)
from trainingsheets.services.groups import create_group


def test_list_categories_sorted_by_name(session: Session):
    session.add_all(
        [
            ExerciseGroupCategory(name="Upper Body"),
            ExerciseGroupCategory(name="Conditioning"),
            ExerciseGroupCategory(name="Lower Body"),
        ]
    )
    session.commit()

    names = [c.name for c in list_categories(session)]
    assert names == ["Conditioning", "Lower Body", "Upper Body"]


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------


def test_create_exercise_trims_description(session: Session):
    exercise = create_exercise(
        ExerciseCreate(name="Dip", description="  Bodyweight push  "), session
    )

    assert exercise.id is not None
    assert exercise.description == "Bodyweight push"
    assert exercise.has_method is True
    assert exercise.video_url is None


def test_create_exercise_blank_description(session: Session):
    with pytest.raises(ValidationError) as exc_info:
        create_exercise(ExerciseCreate(name="Dip", description="   "), session)
    assert exc_info.value.field == "description"


def test_update_exercise_partial(session: Session):
    exercise = create_exercise(
        ExerciseCreate(name="Dip", description="Bodyweight push", video_url="https://x/dip"),
        session,
    )

    updated = update_exercise(exercise.id, ExerciseUpdate(has_method=False), session)
    assert updated.has_method is False
    assert updated.video_url == "https://x/dip"

    cleared = update_exercise(exercise.id, ExerciseUpdate(video_url=None), session)
    assert cleared.video_url is None
    assert cleared.name == "Dip"


def test_delete_exercise(session: Session):
    exercise = create_exercise(ExerciseCreate(description="Temporary"), session)

    delete_exercise(exercise.id, session)

    with pytest.raises(NotFoundError):
        get_exercise(exercise.id, session)


def test_delete_exercise_in_use(session: Session, catalog):
    create_group(
        GroupCreate(
            name="Push A",
            category_id=catalog.upper_body,
            exercise_methods=[
                ExerciseMethodCreate(
                    exercise_configurations=[
                        ConfigurationInput(
                            exercise_id=catalog.bench_press,
                            method_id=catalog.drop_set,
                            series="3",
                            reps="10",
                        )
                    ]
                )
            ],
        ),
        session,
    )

    with pytest.raises(ConflictError):
        delete_exercise(catalog.bench_press, session)
    with pytest.raises(ConflictError):
        delete_method(catalog.drop_set, session)

    # Unused entries can still go
    delete_exercise(catalog.squat, session)
    delete_method(catalog.rest_pause, session)


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


def test_create_method_requires_name(session: Session):
    with pytest.raises(ValidationError) as exc_info:
        create_method(MethodCreate(name=" ", description="Something"), session)
    assert exc_info.value.field == "name"


def test_update_method(session: Session):
    method = create_method(MethodCreate(name="Giant Set", description="Four in a row"), session)

    updated = update_method(method.id, MethodUpdate(description="Four or more in a row"), session)

    assert updated.name == "Giant Set"
    assert updated.description == "Four or more in a row"
    with pytest.raises(ValidationError):
        update_method(method.id, MethodUpdate(name=""), session)


def test_update_method_rejected_midway_changes_nothing(session: Session):
    method = create_method(MethodCreate(name="Giant Set", description="Four in a row"), session)

    with pytest.raises(ValidationError):
        update_method(method.id, MethodUpdate(name="Mega Set", description=" "), session)

    assert get_method(method.id, session).name == "Giant Set"


def test_catalog_commit_failure_is_storage_error(session: Session, monkeypatch):
    def failing_commit():
        raise OperationalError("INSERT INTO exercise", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", failing_commit)
    with pytest.raises(StorageError):
        create_exercise(ExerciseCreate(name="Dip", description="Bodyweight push"), session)
    monkeypatch.undo()

    assert session.exec(select(Exercise)).all() == []


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def test_categories_endpoint(client: TestClient, catalog):
    response = client.get("/api/categories")
    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Lower Body", "Upper Body"]


def test_exercise_endpoints(client: TestClient):
    response = client.post("/api/exercises", json={"name": "Dip", "description": "Push"})
    assert response.status_code == 201
    exercise_id = response.json()["id"]

    assert client.get(f"/api/exercises/{exercise_id}").json()["name"] == "Dip"

    response = client.patch(f"/api/exercises/{exercise_id}", json={"name": "Ring Dip"})
    assert response.status_code == 200
    assert response.json()["name"] == "Ring Dip"

    assert [e["id"] for e in client.get("/api/exercises").json()] == [exercise_id]

    assert client.delete(f"/api/exercises/{exercise_id}").status_code == 204
    assert client.get(f"/api/exercises/{exercise_id}").status_code == 404


def test_create_exercise_endpoint_validation(client: TestClient):
    blank = client.post("/api/exercises", json={"description": " "})
    assert blank.status_code == 400
    assert blank.json()["field"] == "description"

    missing = client.post("/api/exercises", json={"name": "Dip"})
    assert missing.status_code == 400


def test_method_endpoints(client: TestClient, catalog):
    response = client.post("/api/methods", json={"name": "Giant Set", "description": "Four"})
    assert response.status_code == 201
    method_id = response.json()["id"]

    response = client.patch(f"/api/methods/{method_id}", json={"description": "Four or more"})
    assert response.json()["description"] == "Four or more"

    assert len(client.get("/api/methods").json()) == 3
    assert client.delete(f"/api/methods/{method_id}").status_code == 204
    assert client.get(f"/api/methods/{method_id}").status_code == 404

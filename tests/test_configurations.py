import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from trainingsheets.errors import NotFoundError, ReferenceNotFoundError
from trainingsheets.schemas import (
    ConfigurationCreate,
    ConfigurationInput,
    ConfigurationUpdate,
    ExerciseMethodCreate,
    GroupCreate,
)
from trainingsheets.services.graph import get_configuration_full, get_group_full
from trainingsheets.services.groups import (
    create_configuration,
    create_group,
    delete_configuration,
    list_configurations,
    update_configuration,
)


@pytest.fixture(name="group")
def group_fixture(session: Session, catalog):
    """A group with two slots holding one configuration each."""
    return create_group(
        GroupCreate(
            name="Push A",
            category_id=catalog.upper_body,
            exercise_methods=[
                ExerciseMethodCreate(
                    exercise_configurations=[
                        ConfigurationInput(
                            exercise_id=catalog.bench_press,
                            method_id=catalog.drop_set,
                            series="4",
                            reps="8",
                        ),
                    ]
                ),
                ExerciseMethodCreate(
                    exercise_configurations=[
                        ConfigurationInput(exercise_id=catalog.pull_up, series="3", reps="max"),
                    ]
                ),
            ],
        ),
        session,
    )


# ---------------------------------------------------------------------------
# Graph reader
# ---------------------------------------------------------------------------


def test_get_configuration_full_includes_slot_summary(session: Session, group):
    config_id = group.exercise_methods[0].exercise_configurations[0].id

    config = get_configuration_full(config_id, session)

    assert config.exercise.name == "Bench Press"
    assert config.method.name == "Drop Set"
    assert config.exercise_method.id == group.exercise_methods[0].id
    assert config.exercise_method.order == 1


def test_get_configuration_full_missing_returns_none(session: Session):
    assert get_configuration_full(9999, session) is None


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


def test_create_configuration_in_existing_slot(session: Session, catalog, group):
    slot_id = group.exercise_methods[1].id

    config = create_configuration(
        ConfigurationCreate(
            exercise_method_id=slot_id, exercise_id=catalog.squat, series="5", reps="5"
        ),
        session,
    )

    assert config.exercise_method_id == slot_id
    assert config.method is None
    slot = get_group_full(group.id, session).exercise_methods[1]
    assert [c.exercise_id for c in slot.exercise_configurations] == [catalog.pull_up, catalog.squat]


def test_create_configuration_unknown_slot(session: Session, catalog):
    with pytest.raises(ReferenceNotFoundError) as exc_info:
        create_configuration(
            ConfigurationCreate(
                exercise_method_id=9999, exercise_id=catalog.squat, series="5", reps="5"
            ),
            session,
        )
    assert exc_info.value.entity == "Exercise method"


def test_update_configuration_keeps_method_when_omitted(session: Session, group):
    config_id = group.exercise_methods[0].exercise_configurations[0].id

    updated = update_configuration(config_id, ConfigurationUpdate(series="5"), session)

    assert updated.series == "5"
    assert updated.reps == "8"
    assert updated.method is not None


def test_update_configuration_explicit_null_clears_method(session: Session, group):
    config_id = group.exercise_methods[0].exercise_configurations[0].id

    updated = update_configuration(config_id, ConfigurationUpdate(method_id=None), session)

    assert updated.method_id is None
    assert updated.method is None


def test_update_configuration_unknown_method(session: Session, group):
    config_id = group.exercise_methods[0].exercise_configurations[0].id

    with pytest.raises(ReferenceNotFoundError):
        update_configuration(config_id, ConfigurationUpdate(method_id=4242), session)
    assert get_configuration_full(config_id, session).method is not None


def test_delete_configuration_only_removes_itself(session: Session, group):
    first = group.exercise_methods[0]

    delete_configuration(first.exercise_configurations[0].id, session)

    refreshed = get_group_full(group.id, session)
    assert refreshed.exercise_methods[0].id == first.id
    assert refreshed.exercise_methods[0].exercise_configurations == []
    assert len(refreshed.exercise_methods[1].exercise_configurations) == 1


def test_delete_configuration_not_found(session: Session):
    with pytest.raises(NotFoundError):
        delete_configuration(9999, session)


def test_list_configurations_by_slot(session: Session, group):
    slot_id = group.exercise_methods[1].id

    assert len(list_configurations(None, session)) == 2
    scoped = list_configurations(slot_id, session)
    assert [c.exercise_method_id for c in scoped] == [slot_id]


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def test_configuration_endpoints(client: TestClient, catalog, group):
    slot_id = group.exercise_methods[0].id

    response = client.post(
        "/api/exercise-configurations",
        json={
            "exercise_method_id": slot_id,
            "exercise_id": catalog.squat,
            "method_id": catalog.rest_pause,
            "series": "3",
            "reps": "12",
        },
    )
    assert response.status_code == 201
    config = response.json()
    assert config["exercise"]["name"] == "Squat"
    assert config["exercise_method"]["id"] == slot_id

    response = client.get(f"/api/exercise-configurations/{config['id']}")
    assert response.status_code == 200
    assert response.json() == config

    response = client.put(
        f"/api/exercise-configurations/{config['id']}", json={"reps": "10", "method_id": None}
    )
    assert response.status_code == 200
    assert response.json()["reps"] == "10"
    assert response.json()["method"] is None

    listed = client.get(f"/api/exercise-configurations?exercise_method_id={slot_id}").json()
    assert len(listed) == 2

    assert client.delete(f"/api/exercise-configurations/{config['id']}").status_code == 204
    assert client.get(f"/api/exercise-configurations/{config['id']}").status_code == 404


def test_post_configuration_requires_reps(client: TestClient, catalog, group):
    response = client.post(
        "/api/exercise-configurations",
        json={
            "exercise_method_id": group.exercise_methods[0].id,
            "exercise_id": catalog.squat,
            "series": "3",
            "reps": "",
        },
    )
    assert response.status_code == 400

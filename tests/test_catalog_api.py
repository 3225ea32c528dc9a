"""Integration tests for the catalog API endpoints."""

from __future__ import annotations

import json
import os
import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from sqlalchemy import create_engine


TEST_DB_PATH = pathlib.Path(__file__).parent / "test_catalog.db"
TEST_DB_URL = f"sqlite:///{TEST_DB_PATH}"
SAMPLE_DATA_PATH = PROJECT_ROOT / "data" / "templates.json"
os.environ["DATABASE_URL"] = TEST_DB_URL


def _reset_database() -> None:
    """Point the engine at the test database and recreate every table."""

    from template_catalog.config import reset_settings_cache

    reset_settings_cache()

    from template_catalog.infrastructure import database

    if str(database.engine.url) != TEST_DB_URL:
        # The module may have been imported before DATABASE_URL was set.
        database.engine.dispose()
        database.engine = create_engine(
            TEST_DB_URL, connect_args={"check_same_thread": False}
        )
        database.SessionLocal.configure(bind=database.engine)

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()


def _sample_records() -> list[dict]:
    return json.loads(SAMPLE_DATA_PATH.read_text(encoding="utf-8"))["templates"]


def _seed(records) -> None:
    from template_catalog.infrastructure import database
    from template_catalog.infrastructure.repositories import CalculationTemplateRepository

    session = database.SessionLocal()
    try:
        repository = CalculationTemplateRepository(session)
        for record in records:
            repository.save_record(record)
    finally:
        session.close()


@pytest.fixture(autouse=True)
def setup_database():
    """Prepare a fresh database for every test."""

    _reset_database()
    yield

    from template_catalog.infrastructure import database

    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture()
def client():
    """Return a test client bound to a seeded application instance."""

    _seed(_sample_records())

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def test_list_templates_defaults_to_popular_order(client: TestClient) -> None:
    response = client.get("/catalog/templates")

    assert response.status_code == 200
    payload = response.json()
    assert [item["id"] for item in payload] == [
        "arch-area-calc",
        "elec-demand-calc",
        "str-beam-design",
        "hyd-water-demand",
    ]
    beam = payload[2]
    assert beam["usageCount"] == 234
    assert beam["necReference"] == "NEC-SE-HM"
    assert beam["isFavorite"] is False
    assert beam["parameters"][4]["dependencies"][0]["dependsOn"] == "hasSeismicLoad"


def test_list_templates_applies_query_filters(client: TestClient) -> None:
    structural = client.get("/catalog/templates", params={"category": "structural"})
    verified = client.get("/catalog/templates", params={"onlyVerified": "true"})
    searched = client.get("/catalog/templates", params={"search": " agua ", "sortBy": "name"})
    paged = client.get("/catalog/templates", params={"skip": 1, "limit": 2})

    assert [item["id"] for item in structural.json()] == ["str-beam-design"]
    assert "hyd-water-demand" not in [item["id"] for item in verified.json()]
    assert [item["id"] for item in searched.json()] == ["hyd-water-demand"]
    assert [item["id"] for item in paged.json()] == ["elec-demand-calc", "str-beam-design"]


def test_read_template_and_missing_template(client: TestClient) -> None:
    found = client.get("/catalog/templates/elec-demand-calc")
    missing = client.get("/catalog/templates/does-not-exist")

    assert found.status_code == 200
    assert found.json()["profession"] == ["architect", "electrical_engineer"]
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Plantilla no encontrada"


def test_categories_count_verified_templates(client: TestClient) -> None:
    response = client.get("/catalog/categories")

    assert response.status_code == 200
    categories = {category["id"]: category for category in response.json()}
    assert categories["structural"]["count"] == 1
    assert categories["hydraulic"]["count"] == 0
    subcategories = {sub["id"]: sub["count"] for sub in categories["architectural"]["subcategories"]}
    assert subcategories == {"areas": 1, "accessibility": 0}


def test_stats_follow_filters(client: TestClient) -> None:
    everything = client.get("/catalog/stats").json()
    empty = client.get("/catalog/stats", params={"category": "custom"}).json()

    assert everything["total"] == 4
    assert everything["verifiedCount"] == 3
    assert everything["totalUsage"] == 234 + 342 + 445 + 58
    assert everything["byCategory"]["structural"]["count"] == 1
    assert empty["total"] == 0
    assert empty["avgRating"] == 0


def test_favorites_are_scoped_by_user_header(client: TestClient) -> None:
    headers = {"X-User-Id": "ingeniera-1"}

    toggled = client.post("/catalog/templates/str-beam-design/favorite", headers=headers)
    assert toggled.status_code == 200
    assert toggled.json() == {"templateId": "str-beam-design", "isFavorite": True}

    own = client.get("/catalog/templates", params={"onlyFavorites": "true"}, headers=headers)
    anonymous = client.get("/catalog/templates", params={"onlyFavorites": "true"})
    assert [item["id"] for item in own.json()] == ["str-beam-design"]
    assert anonymous.json() == []

    untoggled = client.post("/catalog/templates/str-beam-design/favorite", headers=headers)
    assert untoggled.json()["isFavorite"] is False

    missing = client.post("/catalog/templates/does-not-exist/favorite", headers=headers)
    assert missing.status_code == 404


def test_parameter_defaults(client: TestClient) -> None:
    response = client.get("/catalog/templates/str-beam-design/parameters/defaults")

    assert response.status_code == 200
    values = response.json()["values"]
    assert values["beamWidth"] == 30
    assert values["concreteStrength"] == "28"
    assert values["hasSeismicLoad"] is False
    assert values["seismicZone"] == ""


def test_parameter_validation_reports_errors_and_states(client: TestClient) -> None:
    payload = {
        "values": {
            "beamWidth": 10,
            "beamHeight": 60,
            "concreteStrength": "28",
            "hasSeismicLoad": True,
        }
    }

    response = client.post("/catalog/templates/str-beam-design/parameters/validate", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["isValid"] is False
    assert body["errors"]["beamWidth"]["code"] == "out_of_range"
    assert body["errors"]["seismicZone"]["code"] == "missing_required"
    assert body["states"]["seismicZone"] == {"visible": True, "required": True, "enabled": True}


def test_hidden_parameter_value_produces_warning(client: TestClient) -> None:
    payload = {
        "values": {
            "beamWidth": 30,
            "beamHeight": 60,
            "concreteStrength": "28",
            "hasSeismicLoad": False,
            "seismicZone": "V",
        }
    }

    response = client.post("/catalog/templates/str-beam-design/parameters/validate", json=payload)

    body = response.json()
    assert body["isValid"] is True
    assert "seismicZone" in body["warnings"]
    assert body["states"]["seismicZone"]["visible"] is False


def test_cyclic_template_is_not_served(client: TestClient) -> None:
    cyclic = {
        "id": "cyclic",
        "name": "Plantilla cíclica",
        "category": "custom",
        "verified": True,
        "parameters": [
            {"name": "a", "type": "number", "dependencies": [
                {"dependsOn": "b", "condition": {"operator": "eq", "value": 1}, "action": "hide"}
            ]},
            {"name": "b", "type": "number", "dependencies": [
                {"dependsOn": "a", "condition": {"operator": "eq", "value": 1}, "action": "hide"}
            ]},
        ],
    }
    _seed([cyclic])

    listed = client.get("/catalog/templates")
    detail = client.get("/catalog/templates/cyclic")

    assert len(listed.json()) == 4
    assert detail.status_code == 404


def test_legacy_record_keys_survive_storage(client: TestClient) -> None:
    _seed(
        [
            {
                "id": "legacy-footing",
                "name": "Zapata aislada",
                "type": "foundation",
                "averageRating": 4.6,
                "usageCount": 80,
                "isVerified": True,
                "updatedAt": "2024-02-01T12:00:00Z",
                "targetProfession": "civil_engineer",
            }
        ]
    )

    response = client.get("/catalog/templates/legacy-footing")

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "foundation"
    assert body["rating"] == 4.6
    assert body["verified"] is True
    assert body["trending"] is True
    assert body["profession"] == ["civil_engineer"]
    assert body["lastUpdated"].startswith("2024-02-01")


def test_unavailable_repository_returns_503(client: TestClient) -> None:
    from template_catalog.infrastructure import database

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)

    response = client.get("/catalog/templates")

    assert response.status_code == 503


def test_favorites_repository_round_trip() -> None:
    from template_catalog.infrastructure import database
    from template_catalog.infrastructure.repositories import (
        FavoritesRepository,
        favorites_key,
    )

    session = database.SessionLocal()
    try:
        repository = FavoritesRepository(session, key=favorites_key("user-7"))
        assert repository.key == "template-favorites:user-7"
        assert repository.load() == []

        repository.save(["b", "a"])
        assert repository.load() == ["b", "a"]
        assert FavoritesRepository(session).load() == []
    finally:
        session.close()

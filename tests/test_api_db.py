from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from conftest import make_settings
from copyworx.api import create_app
from copyworx.config.dependencies import Dependencies

USER = {"X-User-Id": "user_123"}


def test_unconfigured_database_returns_503():
    client = TestClient(create_app(Dependencies(settings=make_settings())))

    response = client.get("/api/db/brand-voices", params={"project_id": "p1"}, headers=USER)

    assert response.status_code == 503
    assert response.json() == {"error": "Database not configured", "details": "Supabase is not set up"}


def test_missing_user_returns_401(client):
    response = client.get("/api/db/personas", params={"project_id": "p1"})

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"


def test_get_brand_voice_returns_null_when_absent(client, supabase):
    response = client.get("/api/db/brand-voices", params={"project_id": "p1"}, headers=USER)

    assert response.status_code == 200
    assert response.json() is None
    _, kwargs = supabase.execute_with_retry.call_args
    assert kwargs["filters"] == {"project_id": "p1", "user_id": "user_123"}


def test_get_brand_voice_requires_project_id(client):
    response = client.get("/api/db/brand-voices", headers=USER)

    assert response.status_code == 400
    assert response.json()["details"] == "Project ID is required"


def test_create_brand_voice_returns_201(client, supabase):
    row = {"id": "bv1", "project_id": "p1", "brand_name": "Acme"}
    supabase.execute_with_retry = AsyncMock(side_effect=[[], [row]])

    response = client.post(
        "/api/db/brand-voices",
        json={"project_id": "p1", "brand_name": " Acme ", "forbidden_words": ["cheap"]},
        headers=USER,
    )

    assert response.status_code == 201
    assert response.json() == row


def test_update_brand_voice_returns_200(client, supabase):
    row = {"id": "bv1", "project_id": "p1", "brand_name": "Acme 2"}
    supabase.execute_with_retry = AsyncMock(side_effect=[[{"id": "bv1"}], [row]])

    response = client.post(
        "/api/db/brand-voices",
        json={"project_id": "p1", "brand_name": "Acme 2"},
        headers=USER,
    )

    assert response.status_code == 200
    assert response.json() == row


def test_delete_brand_voice(client):
    response = client.delete("/api/db/brand-voices", params={"project_id": "p1"}, headers=USER)

    assert response.status_code == 200
    assert response.json() == {"success": True, "project_id": "p1"}


def test_list_personas(client, supabase):
    rows = [{"id": "a", "name": "Dana"}, {"id": "b", "name": "Sam"}]
    supabase.execute_with_retry = AsyncMock(return_value=rows)

    response = client.get("/api/db/personas", params={"project_id": "p1"}, headers=USER)

    assert response.status_code == 200
    assert response.json() == rows


def test_get_missing_persona_returns_404(client):
    response = client.get("/api/db/personas", params={"id": "nope"}, headers=USER)

    assert response.status_code == 404
    assert response.json() == {"error": "Not found", "details": "Persona not found"}


def test_create_persona_returns_201(client, supabase):
    row = {"id": "a", "name": "Dana"}
    supabase.execute_with_retry = AsyncMock(return_value=[row])

    response = client.post("/api/db/personas", json={"project_id": "p1", "name": "Dana"}, headers=USER)

    assert response.status_code == 201
    assert response.json() == row


def test_create_persona_rejects_long_name(client):
    response = client.post("/api/db/personas", json={"project_id": "p1", "name": "n" * 101}, headers=USER)

    assert response.status_code == 400
    assert response.json()["details"] == "Persona name cannot exceed 100 characters"


def test_update_unknown_persona_returns_404(client):
    response = client.put("/api/db/personas", json={"id": "nope", "goals": "More time"}, headers=USER)

    assert response.status_code == 404


def test_delete_persona(client):
    response = client.delete("/api/db/personas", params={"id": "a"}, headers=USER)

    assert response.json() == {"success": True, "id": "a"}


def test_datastore_error_returns_500(client, supabase):
    supabase.execute_with_retry = AsyncMock(
        side_effect=APIError({"message": "relation does not exist", "code": "42P01"})
    )

    response = client.get("/api/db/personas", params={"project_id": "p1"}, headers=USER)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "details": "relation does not exist"}

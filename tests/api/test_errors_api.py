"""Tests for the error envelope and service endpoints."""
from fastapi.testclient import TestClient
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from cooking_cost.database import get_db
from cooking_cost.exceptions import InternalError
from cooking_cost.main import app


class TestServiceEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"


class TestErrorEnvelope:
    def test_unknown_route(self, client):
        response = client.get("/api/v1/nothing-here")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "NOT_FOUND"
        assert body["path"] == "/api/v1/nothing-here"

    def test_bad_path_parameter(self, client):
        response = client.get("/api/v1/dishes/abc")
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "dish_id"

    def test_malformed_query_value(self, client):
        response = client.get("/api/v1/ingredients?limit=lots")
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "limit"

    def test_pool_exhaustion_is_503(self, client):
        def exhausted_pool():
            raise PoolTimeoutError("QueuePool limit reached")

        app.dependency_overrides[get_db] = exhausted_pool
        response = client.get("/api/v1/ingredients")
        assert response.status_code == 503
        assert response.json()["error"] == "SERVICE_UNAVAILABLE"

    def test_internal_error_envelope(self, client):
        def broken_ledger():
            raise InternalError("Cost ledger unavailable")

        app.dependency_overrides[get_db] = broken_ledger
        response = client.get("/api/v1/dishes")
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "INTERNAL_ERROR"
        assert body["message"] == "Cost ledger unavailable"

    def test_unhandled_error_uses_internal_error_code(self):
        def broken_session():
            raise RuntimeError("disk on fire")

        app.dependency_overrides[get_db] = broken_session
        try:
            with TestClient(app, raise_server_exceptions=False) as quiet_client:
                response = quiet_client.get("/api/v1/memos")
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "INTERNAL_ERROR"
        assert body["message"].startswith("Internal server error")

    def test_validation_details_are_field_message_pairs(self, client):
        response = client.post("/api/v1/ingredients", json={"name": ""})
        assert response.status_code == 400
        for detail in response.json()["details"]:
            assert set(detail) == {"field", "message"}

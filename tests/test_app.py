"""
Application-level Tests

Error body shape for failures that never reach a route handler,
validation that happens before the database is touched, CORS, and the
informational endpoints.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from library_catalog.config import Settings
from library_catalog.database import get_db
from library_catalog.main import app


class TestErrorShape:
    """Every error response is {"message": ...}."""

    def test_unknown_route(self, client):
        response = client.get("/publishers")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Not Found"}

    def test_wrong_method(self, client):
        response = client.patch("/authors/1", json={"name": "x"})

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.json() == {"message": "Method Not Allowed"}

    def test_malformed_json_body(self, client):
        response = client.post(
            "/authors",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid request body"}

    def test_body_of_wrong_type(self, client):
        response = client.post("/books", json=["Test Book", 1])

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Invalid request body"}


class TestInvalidIdSkipsStore:
    """Invalid identifiers are rejected before any database call."""

    @pytest.fixture
    def untouched_session(self):
        session = MagicMock(spec=Session)
        for name in ("execute", "add", "delete", "commit", "rollback"):
            getattr(session, name).side_effect = AssertionError(f"session.{name} called")

        def override_get_db():
            yield session

        app.dependency_overrides[get_db] = override_get_db
        yield session
        app.dependency_overrides.clear()

    @pytest.mark.parametrize(
        "entity,body",
        [
            ("author", {"name": "Someone"}),
            ("book", {"title": "Something", "authorId": 1}),
        ],
    )
    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    @pytest.mark.parametrize("raw_id", ["abc", "0", "-1"])
    def test_invalid_id_never_reaches_store(self, untouched_session, entity, body, method, raw_id):
        with TestClient(app) as client:
            if method == "put":
                response = client.put(f"/{entity}s/{raw_id}", json=body)
            else:
                response = getattr(client, method)(f"/{entity}s/{raw_id}")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": f"Invalid {entity} ID"}
        assert untouched_session.method_calls == []


class TestCors:
    """All origins are allowed by default."""

    def test_preflight_from_any_origin(self, client):
        response = client.options(
            "/authors",
            headers={
                "Origin": "http://frontend.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] in ("*", "http://frontend.example")

    def test_simple_request_from_any_origin(self, client):
        response = client.get("/authors", headers={"Origin": "http://elsewhere.example"})

        assert "access-control-allow-origin" in response.headers


class TestInfoEndpoints:
    """Tests for / and /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["docs"] == "/docs"


class TestSettings:
    """Tests for configuration parsing."""

    def test_origins_list(self):
        settings = Settings(allowed_origins="http://a.example, http://b.example")

        assert settings.allowed_origins_list == ["http://a.example", "http://b.example"]

    def test_api_base_url_trailing_slash(self):
        assert Settings(api_base_url="http://api.example/").api_base_url == "http://api.example"

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite:///./x.db").is_sqlite
        assert not Settings(database_url="postgresql://u:p@db/catalog").is_sqlite

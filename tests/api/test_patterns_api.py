"""HTTP API tests against the FastAPI app."""
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from behavioral_patterns.api.server import create_fastapi_app
from behavioral_patterns.config.schemas import ServerConfig

pytestmark = pytest.mark.api


@pytest.fixture
def client(application):
    return TestClient(create_fastapi_app(ServerConfig(), application=application))


def test_health(client):
    # Act
    response = client.get("/health")

    # Assert
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "behavioral-patterns", "version": "1.0.0"}


def test_info(client):
    data = client.get("/info").json()

    assert data["pattern_count"] == 8
    assert data["demo_count"] == 8
    assert data["title"] == "Behavioral Design Patterns"


def test_list_patterns(client):
    response = client.get("/patterns")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 8
    assert [p["slug"] for p in data["patterns"]][:2] == ["strategy", "observer"]


def test_list_patterns_by_category(client):
    assert client.get("/patterns", params={"category": "structural"}).json() == {"patterns": [], "count": 0}


def test_list_patterns_unknown_category(client):
    # Act
    response = client.get("/patterns", params={"category": "musical"})

    # Assert
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"


def test_get_pattern(client):
    data = client.get("/patterns/chain-of-responsibility").json()

    assert data["name"] == "Chain of Responsibility"
    assert data["snippets"] is None
    assert data["related"] == ["command"]


def test_get_pattern_with_snippets(client):
    data = client.get("/patterns/state", params={"snippets": "true"}).json()

    assert set(data["snippets"]) == set(data["snippet_refs"])
    assert data["snippets"]["behavioral_patterns.patterns.state:FailedState"].startswith("class FailedState")


def test_get_unknown_pattern(client):
    # Act
    response = client.get("/patterns/singleton", headers={"X-Request-ID": "req-42"})

    # Assert
    assert response.status_code == 404
    body = response.json()
    assert body["error"]["code"] == "NOT_FOUND"
    assert body["error"]["details"]["resource_id"] == "singleton"
    assert body["request_id"] == "req-42"
    assert response.headers["X-Request-ID"] == "req-42"


def test_request_id_is_generated(client):
    response = client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 36


def test_run_demo(client):
    response = client.post("/patterns/command/demo")

    assert response.status_code == 200
    data = response.json()
    assert data["slug"] == "command"
    assert data["lines"][0] == "edited:   'ello world'"


def test_failing_demo_maps_to_422(application):
    # Arrange
    registration = application.registry.get("mediator")
    registration.demo = Mock(side_effect=RuntimeError("room on fire"))
    client = TestClient(create_fastapi_app(application=application))

    # Act
    response = client.post("/patterns/mediator/demo")

    # Assert
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "DEMO_FAILED"


def test_catalog_validation(client):
    response = client.get("/catalog/validation")

    assert response.status_code == 200
    assert response.json()["valid"] is True


def test_catalog_readme(client):
    response = client.get("/catalog/readme", params={"title": "API Patterns"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/markdown")
    assert response.text.startswith("# API Patterns\n")


def test_docs_can_be_disabled(application):
    client = TestClient(create_fastapi_app(ServerConfig(docs_enabled=False), application=application))
    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404

"""
Tests for application wiring: error handlers, request logging, health.
"""

import logging

from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from lesson_hub_api.app.main import create_app
from lesson_hub_api.app.services.lesson_service import LessonService


def test_unknown_route_returns_json_message(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


def test_database_error_becomes_500(client, store):
    store.lessons.fail_with = ServerSelectionTimeoutError("no servers")

    response = client.get("/api/lessons")

    assert response.status_code == 500
    assert response.json() == {"message": "Database error"}


def test_unexpected_error_is_caught(app, monkeypatch):
    async def explode(self, search=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(LessonService, "list_lessons", explode)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/lessons")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}


def test_request_logging(client, lesson_ids, caplog):
    caplog.set_level(logging.INFO, logger="lesson_hub_api.requests")

    client.post(
        "/api/lessons",
        json={"topic": "Art", "location": "York", "price": 10, "space": 5},
    )

    messages = [record.getMessage() for record in caplog.records if record.name == "lesson_hub_api.requests"]
    assert messages[0].startswith("POST /api/lessons - IP: ")
    assert '"topic": "Art"' in messages[1]
    assert "Response status: 201" in messages[-1]


def test_health_reports_store_state(client, store):
    assert client.get("/health").json()["database"] == "connected"

    store.healthy = False
    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "degraded"


def test_root_banner(client):
    assert client.get("/").json()["health"] == "/health"


def test_lifespan_connects_and_closes_store(store, images_dir):
    app = create_app(store=store, images_dir=images_dir)

    with TestClient(app):
        assert store.connected

    assert not store.connected


def test_cors_headers(client):
    response = client.get("/api/lessons", headers={"Origin": "http://example.com"})

    assert response.headers["access-control-allow-origin"] == "*"

# tests/test_app.py

from __future__ import annotations

import logging
from datetime import datetime

from fastapi.testclient import TestClient

from taskmaster_api.app.core.defects import KNOWN_DEFECT_COMPLETE_DELETES_TASK, KNOWN_DEFECT_LOGIN_COMPARISON
from taskmaster_api.app.main import create_app

from .conftest import make_settings


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


def test_unknown_route_is_endpoint_not_found(client) -> None:
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}


def test_unsupported_method_is_endpoint_not_found(client) -> None:
    response = client.patch("/api/tasks/1", json={"title": "x"})

    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}


def test_malformed_json_on_update_is_bad_request(client) -> None:
    response = client.put(
        "/api/tasks/1",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_malformed_json_on_create_reports_title_required(client) -> None:
    response = client.post(
        "/api/tasks",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Task title required"}


def test_unexpected_error_is_generic_500(app) -> None:
    def boom(user_id):
        raise RuntimeError("database on fire")

    app.state.store.list_tasks = boom
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/tasks")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "fire" not in response.text


def test_apps_do_not_share_state(make_client) -> None:
    first = make_client()
    second = make_client()

    first.post("/api/tasks", json={"title": "only in first"})

    assert len(first.get("/api/tasks").json()["tasks"]) == 4
    assert len(second.get("/api/tasks").json()["tasks"]) == 3


def test_unseeded_app_starts_empty(make_client) -> None:
    client = make_client(seed_demo_data=False)

    assert client.get("/api/tasks").json() == {"tasks": []}
    assert client.post("/api/tasks", json={"title": "first"}).json()["task"]["id"] == 1


def test_cors_allows_any_origin_by_default(client) -> None:
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})

    assert response.headers["access-control-allow-origin"] == "*"


def test_active_defects_are_logged_at_startup(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="taskmaster_api.app.main"):
        create_app(make_settings(hotfix_login_comparison=True))

    messages = " ".join(record.getMessage() for record in caplog.records)
    assert KNOWN_DEFECT_COMPLETE_DELETES_TASK in messages
    assert KNOWN_DEFECT_LOGIN_COMPARISON not in messages

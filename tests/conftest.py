# tests/conftest.py

from __future__ import annotations

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from taskmaster_api.app.core.config import Settings
from taskmaster_api.app.main import create_app


def make_settings(**overrides) -> Settings:
    """
    Settings for a test app: every defect active, demo data seeded and a
    cheap password hash so fixture set-up stays fast.
    """
    values = dict(
        secret_key="test-secret",
        password_hash_iterations=1000,
        seed_demo_data=True,
        hotfix_login_comparison=False,
        hotfix_complete_deletes_task=False,
        hotfix_auth_bypass=False,
        hotfix_unauthenticated_tasks=False,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def make_client() -> Callable[..., TestClient]:
    """
    Factory for a client on a fresh app built with setting overrides,
    e.g. ``make_client(hotfix_login_comparison=True)``.
    """

    def _make(**overrides) -> TestClient:
        return TestClient(create_app(make_settings(**overrides)))

    return _make


@pytest.fixture()
def created_task_id(client: TestClient) -> int:
    response = client.post("/api/tasks", json={"title": "Task for Update Test"})
    assert response.status_code == 201
    return response.json()["task"]["id"]

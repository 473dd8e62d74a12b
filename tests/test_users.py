# tests/test_users.py

from __future__ import annotations

from taskmaster_api.app.core.store import InMemoryStore
from taskmaster_api.app.main import create_app
from fastapi.testclient import TestClient

from .conftest import make_settings


def test_known_defect_profile_is_always_user_one(client) -> None:
    response = client.get("/api/users/profile")

    assert response.status_code == 200
    assert response.json() == {"user": {"id": 1, "username": "demo"}}


def test_known_defect_profile_ignores_token_of_other_user(client) -> None:
    token = client.post("/api/auth/register", json={"username": "alice", "password": "pw"}).json()["token"]

    response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.json()["user"]["username"] == "demo"


def test_profile_not_found_when_user_one_missing() -> None:
    client = TestClient(create_app(make_settings(), store=InMemoryStore()))

    response = client.get("/api/users/profile")

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_after_hotfix_profile_requires_token(make_client) -> None:
    client = make_client(hotfix_auth_bypass=True)

    missing = client.get("/api/users/profile")
    invalid = client.get("/api/users/profile", headers={"Authorization": "Bearer not.a.token"})

    assert missing.status_code == 401
    assert missing.json() == {"error": "Not authenticated"}
    assert invalid.status_code == 401
    assert invalid.json() == {"error": "Invalid or expired token"}


def test_after_hotfix_profile_resolves_token_owner(make_client) -> None:
    client = make_client(hotfix_auth_bypass=True)
    registered = client.post("/api/auth/register", json={"username": "alice", "password": "secret1"}).json()

    response = client.get("/api/users/profile", headers={"Authorization": f"Bearer {registered['token']}"})

    assert response.status_code == 200
    assert response.json() == {"user": {"id": registered["user"]["id"], "username": "alice"}}

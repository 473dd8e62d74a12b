# tests/test_auth.py

from __future__ import annotations

import pytest

from taskmaster_api.app.core.security import decode_access_token


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "body",
    [
        {"password": "password123"},
        {"username": "demo"},
        {},
        {"username": "", "password": "password123"},
    ],
)
def test_login_requires_username_and_password(client, body) -> None:
    response = client.post("/api/auth/login", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Username and password required"}


def test_login_without_body_is_a_validation_error(client) -> None:
    response = client.post("/api/auth/login")

    assert response.status_code == 400
    assert response.json()["error"] == "Username and password required"


@pytest.mark.parametrize("path", ["/api/auth/login", "/api/auth/register"])
@pytest.mark.parametrize(
    "body",
    [
        {"username": 123, "password": "x"},
        {"username": "demo", "password": ["password123"]},
    ],
)
def test_wrongly_typed_credentials_report_required_fields(client, path, body) -> None:
    response = client.post(path, json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Username and password required"}


def test_known_defect_login_rejects_valid_demo_credentials(client) -> None:
    response = client.post("/api/auth/login", json={"username": "demo", "password": "password123"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_rejects_unknown_user(client) -> None:
    response = client.post("/api/auth/login", json={"username": "nonexistent", "password": "anypassword"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_known_defect_login_accepts_any_password_for_account_with_literal(client) -> None:
    # The broken comparison checks the stored password against the
    # literal, so an account whose password *is* the literal logs in
    # whatever is typed.
    client.post("/api/auth/register", json={"username": "mallory", "password": "wrong_password"})

    response = client.post("/api/auth/login", json={"username": "mallory", "password": "something else"})

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "mallory"


def test_after_hotfix_login_authenticates_valid_credentials(make_client) -> None:
    client = make_client(hotfix_login_comparison=True)

    response = client.post("/api/auth/login", json={"username": "demo", "password": "password123"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"] == {"id": 1, "username": "demo"}
    assert "password" not in body["user"]


def test_after_hotfix_login_still_rejects_wrong_password(make_client) -> None:
    client = make_client(hotfix_login_comparison=True)

    response = client.post("/api/auth/login", json={"username": "demo", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_after_hotfix_login_works_for_registered_user(make_client) -> None:
    client = make_client(hotfix_login_comparison=True)
    client.post("/api/auth/register", json={"username": "bob", "password": "hunter22"})

    response = client.post("/api/auth/login", json={"username": "bob", "password": "hunter22"})

    assert response.status_code == 200
    assert response.json()["user"]["username"] == "bob"


# ---------------------------------------------------------------------------
# POST /api/auth/register
# ---------------------------------------------------------------------------

def test_register_requires_username(client) -> None:
    response = client.post("/api/auth/register", json={"password": "newpassword"})

    assert response.status_code == 400
    assert "Username and password required" in response.json()["error"]


def test_register_requires_password(client) -> None:
    response = client.post("/api/auth/register", json={"username": "newuser"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_register_existing_username_conflicts(client) -> None:
    response = client.post("/api/auth/register", json={"username": "demo", "password": "anypassword"})

    assert response.status_code == 409
    assert response.json() == {"error": "Username already exists"}


def test_register_same_username_twice_conflicts(client) -> None:
    first = client.post("/api/auth/register", json={"username": "carol", "password": "pw1"})
    second = client.post("/api/auth/register", json={"username": "carol", "password": "pw2"})

    assert first.status_code == 201
    assert second.status_code == 409


def test_register_new_user(client) -> None:
    response = client.post("/api/auth/register", json={"username": "alice", "password": "secret1"})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"] == {"id": 3, "username": "alice"}
    assert "password" not in body["user"]


def test_register_assigns_increasing_ids(client) -> None:
    ids = [
        client.post("/api/auth/register", json={"username": f"user{i}", "password": "pw"}).json()["user"]["id"]
        for i in range(3)
    ]

    assert ids == sorted(ids)
    assert len(set(ids)) == 3


def test_register_token_identifies_new_user(client, settings) -> None:
    response = client.post("/api/auth/register", json={"username": "dave", "password": "pw"})

    payload = decode_access_token(response.json()["token"], secret_key=settings.secret_key)

    assert payload is not None
    assert payload["sub"] == str(response.json()["user"]["id"])


def test_register_stores_password_hashed(client, app) -> None:
    client.post("/api/auth/register", json={"username": "erin", "password": "plain-text"})

    stored = app.state.store.find_user_by_username("erin")

    assert stored.password_hash != "plain-text"
    assert "plain-text" not in stored.password_hash

"""Session cookie auth tests: register, login, logout, revocation."""

from __future__ import annotations

from fastapi.testclient import TestClient

from marketplace.services import token_service
from tests.conftest import DEFAULT_PASSWORD, register


def test_register_returns_user_and_sets_cookie(client: TestClient) -> None:
    body = register(client, "alice")
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert body["subscriptionTier"] == "free"
    assert body["hasUnlimitedAccess"] is False
    assert "passwordHash" not in body
    assert client.cookies.get("session")


def test_register_duplicate_username_is_400(client: TestClient) -> None:
    register(client, "alice")
    resp = TestClient(client.app).post(
        "/api/register",
        json={
            "username": "alice",
            "email": "other@example.com",
            "password": DEFAULT_PASSWORD,
        },
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Username already exists"


def test_register_validates_body(client: TestClient) -> None:
    resp = client.post(
        "/api/register",
        json={"username": "al", "email": "not-an-email", "password": "short"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation error"
    assert len(body["errors"]) == 3


def test_login_success(client: TestClient) -> None:
    register(TestClient(client.app), "alice")

    resp = client.post(
        "/api/login", json={"username": "alice", "password": DEFAULT_PASSWORD}
    )
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice"
    assert client.get("/api/user").json()["username"] == "alice"


def test_login_wrong_password_is_401(client: TestClient) -> None:
    register(TestClient(client.app), "alice")
    resp = client.post("/api/login", json={"username": "alice", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid username or password"


def test_login_unknown_user_is_401(client: TestClient) -> None:
    resp = client.post(
        "/api/login", json={"username": "ghost", "password": DEFAULT_PASSWORD}
    )
    assert resp.status_code == 401


def test_user_requires_session(client: TestClient) -> None:
    assert client.get("/api/user").status_code == 401


def test_garbage_cookie_is_401(client: TestClient) -> None:
    resp = client.get("/api/user", headers={"Cookie": "session=not-a-jwt"})
    assert resp.status_code == 401


def test_expired_session_is_401(client: TestClient) -> None:
    user = register(TestClient(client.app), "alice")
    expired = token_service.create_session_token(sub=str(user["id"]), ttl_min=-1)
    resp = client.get("/api/user", headers={"Cookie": f"session={expired}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Session expired"


def test_logout_revokes_copied_cookie(client: TestClient) -> None:
    register(client, "alice")
    stolen = client.cookies.get("session")

    assert client.post("/api/logout").status_code == 204

    attacker = TestClient(client.app)
    resp = attacker.get("/api/user", headers={"Cookie": f"session={stolen}"})
    assert resp.status_code == 401


def test_logout_does_not_affect_other_sessions(client: TestClient) -> None:
    alice = TestClient(client.app)
    bob = TestClient(client.app)
    register(alice, "alice")
    register(bob, "bob")

    alice.post("/api/logout")
    assert bob.get("/api/user").status_code == 200


def test_logout_is_idempotent(client: TestClient) -> None:
    assert client.post("/api/logout").status_code == 204
    assert client.post("/api/logout").status_code == 204

"""Passwords and session tokens must never appear in log output."""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from tests.conftest import register

SECRET_PASSWORD = "super-s3cret-p@ssw0rd!"


def _log_text(caplog: pytest.LogCaptureFixture) -> str:
    return " ".join(caplog.messages)


def test_register_does_not_log_password(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG):
        register(client, "alice", SECRET_PASSWORD)
    assert SECRET_PASSWORD not in _log_text(caplog)


def test_failed_login_does_not_log_password(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    register(client, "alice", SECRET_PASSWORD)
    with caplog.at_level(logging.DEBUG):
        resp = TestClient(client.app).post(
            "/api/login", json={"username": "alice", "password": SECRET_PASSWORD + "x"}
        )
    assert resp.status_code == 401
    assert SECRET_PASSWORD not in _log_text(caplog)


def test_login_does_not_log_session_token(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    register(client, "alice", SECRET_PASSWORD)
    fresh = TestClient(client.app)
    with caplog.at_level(logging.DEBUG):
        resp = fresh.post(
            "/api/login", json={"username": "alice", "password": SECRET_PASSWORD}
        )
        fresh.post("/api/logout")
    assert resp.status_code == 200
    token = resp.cookies.get("session")
    assert token
    text = _log_text(caplog)
    assert token not in text
    assert SECRET_PASSWORD not in text

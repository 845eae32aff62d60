"""Error rendering: every failure leaves the API as ``{"message": ...}``."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from marketplace.api.errors import register_error_handlers
from marketplace.core.errors import Internal, PaymentRequired


def _app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("database exploded")

    @app.get("/internal")
    async def internal() -> None:
        raise Internal()

    @app.get("/pay")
    async def pay() -> None:
        raise PaymentRequired(course_price=49.0, subscription_tier="free")

    return app


def test_unexpected_exception_is_logged_500(caplog: pytest.LogCaptureFixture) -> None:
    client = TestClient(_app(), raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR, logger="marketplace.api.errors"):
        resp = client.get("/boom")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}
    assert "database exploded" not in resp.text
    assert any("Unhandled error on GET /boom" in m for m in caplog.messages)


def test_internal_error_renders_like_unhandled() -> None:
    resp = TestClient(_app()).get("/internal")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


def test_details_are_camel_cased() -> None:
    resp = TestClient(_app()).get("/pay")
    assert resp.status_code == 402
    assert resp.json() == {
        "message": "Payment required",
        "coursePrice": 49.0,
        "subscriptionTier": "free",
    }

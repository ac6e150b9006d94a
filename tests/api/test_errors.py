"""Tests for the error envelope produced by the exception handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from cinecatalog.api.errors import register_exception_handlers
from cinecatalog.config import settings
from cinecatalog.exceptions import ValidationError


@pytest.fixture
def failing_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom() -> None:
        raise RuntimeError("kaboom")

    @app.get("/store")
    async def store() -> None:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    @app.get("/rule")
    async def rule() -> None:
        raise ValidationError("You cannot delete your own account")

    return app


async def get(app: FastAPI, url: str):
    # Exception handlers for plain Exception run in ServerErrorMiddleware, which re-raises
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(url)


async def test_unhandled_error_includes_debug_details_outside_production(
    failing_app: FastAPI,
) -> None:
    response = await get(failing_app, "/boom")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["message"] == "Internal server error"
    assert error["details"]["type"] == "RuntimeError"
    assert error["details"]["error"] == "kaboom"
    assert error["details"]["stack"]


async def test_unhandled_error_hides_details_in_production(
    failing_app: FastAPI, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "environment", "production")

    response = await get(failing_app, "/boom")

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": {"message": "Internal server error", "details": None},
    }


async def test_store_error_is_reported_as_database_error(failing_app: FastAPI) -> None:
    response = await get(failing_app, "/store")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["message"] == "Database error"
    assert error["details"]["type"] == "OperationalError"


async def test_domain_error_keeps_its_status(failing_app: FastAPI) -> None:
    response = await get(failing_app, "/rule")

    assert response.status_code == 400
    assert response.json()["error"] == {
        "message": "You cannot delete your own account",
        "details": None,
    }

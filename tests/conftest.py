"""Shared test fixtures."""

from collections.abc import Iterator
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI

from cinecatalog.api.errors import register_exception_handlers
from cinecatalog.api.routes import auth, bulk, directors, genres, health, media, media_types, producers
from cinecatalog.config import settings
from cinecatalog.database import get_db

API = settings.api_prefix


@pytest.fixture
def test_app() -> FastAPI:
    """App with every API router and error handler, but without the back-office."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router)
    for module in (genres, directors, producers, media_types, media, bulk, auth):
        app.include_router(module.router, prefix=API)
    return app


@asynccontextmanager
async def _savepoint():
    yield


def make_db() -> MagicMock:
    """AsyncSession stand-in whose savepoints are no-ops."""
    db = MagicMock()
    db.execute = AsyncMock()
    db.get = AsyncMock(return_value=None)
    db.flush = AsyncMock()
    db.refresh = AsyncMock()
    db.delete = AsyncMock()
    db.begin_nested = MagicMock(side_effect=lambda: _savepoint())
    return db


@pytest.fixture
def db() -> MagicMock:
    return make_db()


@pytest.fixture
def override_db(test_app: FastAPI, db: MagicMock) -> Iterator[MagicMock]:
    """Route every request's session to the ``db`` mock."""

    async def override() -> Any:
        yield db

    test_app.dependency_overrides[get_db] = override
    yield db
    test_app.dependency_overrides.clear()


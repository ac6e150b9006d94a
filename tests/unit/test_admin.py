"""Unit tests for the back-office sign-in, its model views and the create_admin script."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cinecatalog.admin.auth import AdminAuth
from cinecatalog.admin.views import DirectorAdmin, GenreAdmin, MediaTypeAdmin, ProducerAdmin
from cinecatalog.models.user import User
from cinecatalog.scripts import create_admin
from cinecatalog.services.auth import AuthService, hash_password, verify_password


def session_factory(session: MagicMock):
    @asynccontextmanager
    async def factory():
        yield session

    return factory


def make_request(form: dict | None = None, session: dict | None = None) -> MagicMock:
    request = MagicMock()
    request.form = AsyncMock(return_value=form or {})
    request.session = session if session is not None else {}
    return request


def make_user(role: str = "admin", is_active: bool = True) -> User:
    return User(
        id="admin-1",
        first_name="Ana",
        last_name="García",
        email="admin@example.com",
        password_hash=hash_password("secret123"),
        role=role,
        is_active=is_active,
    )


class TestAdminAuth:
    @pytest.mark.parametrize(
        ("user", "password", "expected"),
        [
            (make_user(), "secret123", True),
            (make_user(), "wrong", False),
            (make_user(role="user"), "secret123", False),
            (make_user(is_active=False), "secret123", False),
            (None, "secret123", False),
        ],
    )
    async def test_login(self, user: User | None, password: str, expected: bool) -> None:
        request = make_request(form={"username": "admin@example.com", "password": password})

        with (
            patch("cinecatalog.admin.auth.AsyncSessionLocal", session_factory(MagicMock())),
            patch.object(AuthService, "find_by_email", AsyncMock(return_value=user)),
        ):
            assert await AdminAuth(secret_key="test").login(request) is expected

        assert ("user_id" in request.session) is expected

    async def test_authenticate_requires_session(self) -> None:
        assert await AdminAuth(secret_key="test").authenticate(make_request()) is False

    async def test_authenticate_rechecks_role(self) -> None:
        session = MagicMock()
        session.get = AsyncMock(return_value=make_user(role="user"))
        request = make_request(session={"user_id": "admin-1"})

        with patch("cinecatalog.admin.auth.AsyncSessionLocal", session_factory(session)):
            assert await AdminAuth(secret_key="test").authenticate(request) is False

    async def test_logout_clears_session(self) -> None:
        request = make_request(session={"user_id": "admin-1"})

        assert await AdminAuth(secret_key="test").logout(request) is True
        assert request.session == {}


class TestCreateAdminScript:
    async def test_creates_first_admin(self) -> None:
        session = MagicMock()
        count = MagicMock()
        count.scalar_one.return_value = 0
        session.execute = AsyncMock(return_value=count)
        session.commit = AsyncMock()

        with patch.object(create_admin, "AsyncSessionLocal", session_factory(session)):
            user = await create_admin.create_admin("Admin@Example.com", "secret123", "Ana", "García")

        assert user is not None
        assert user.role == "admin"
        assert user.email == "admin@example.com"
        assert verify_password("secret123", user.password_hash)
        session.add.assert_called_once_with(user)
        session.commit.assert_awaited_once()

    async def test_existing_admin_left_alone(self) -> None:
        session = MagicMock()
        count = MagicMock()
        count.scalar_one.return_value = 1
        session.execute = AsyncMock(return_value=count)
        session.commit = AsyncMock()

        with patch.object(create_admin, "AsyncSessionLocal", session_factory(session)):
            assert await create_admin.create_admin("a@b.co", "secret123", "Ana", "García") is None

        session.add.assert_not_called()
        session.commit.assert_not_awaited()


@pytest.mark.parametrize(
    "view", [GenreAdmin, DirectorAdmin, ProducerAdmin, MediaTypeAdmin], ids=lambda v: v.__name__
)
def test_referenced_kinds_cannot_be_deactivated_from_back_office(view) -> None:
    excluded = {column.key for column in view.form_excluded_columns}

    assert "is_active" in excluded
    assert view.can_delete is False

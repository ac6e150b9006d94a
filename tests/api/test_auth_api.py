"""Tests for authentication and user administration endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cinecatalog.exceptions import AuthError, PermissionDeniedError
from cinecatalog.models.user import User
from cinecatalog.services.auth import create_access_token, create_refresh_token
from cinecatalog.services.query_engine import Page


def make_user(id: str = "user-1", role: str = "user", is_active: bool = True) -> User:
    return User(
        id=id,
        first_name="Ana",
        last_name="García",
        email="Ana@Example.com",
        password_hash="not-a-real-hash",
        role=role,
        is_active=is_active,
        avatar="",
    )


def auth_header(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


async def request(app: FastAPI, method: str, url: str, **kwargs: object):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.request(method, url, **kwargs)


async def test_register_returns_user_and_tokens(test_app: FastAPI, override_db: MagicMock) -> None:
    user = make_user()
    service = MagicMock()
    service.register = AsyncMock(return_value=(user, "access-token", "refresh-token"))

    with patch("cinecatalog.api.routes.auth.AuthService", return_value=service):
        response = await request(
            test_app,
            "POST",
            "/api/v1/auth/register",
            json={
                "firstName": "Ana",
                "lastName": "García",
                "email": "ana@example.com",
                "password": "secret123",
            },
        )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["token"] == "access-token"
    assert data["refreshToken"] == "refresh-token"
    assert data["user"]["email"] == "ana@example.com"
    assert data["user"]["fullName"] == "Ana García"
    assert "passwordHash" not in data["user"]


async def test_register_rejects_short_password(test_app: FastAPI, override_db: MagicMock) -> None:
    response = await request(
        test_app,
        "POST",
        "/api/v1/auth/register",
        json={"firstName": "Ana", "lastName": "García", "email": "ana@example.com", "password": "123"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "password"


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (AuthError("Invalid credentials"), 401),
        (PermissionDeniedError("User is inactive. Contact an administrator"), 403),
    ],
)
async def test_login_failures(
    test_app: FastAPI, override_db: MagicMock, error: Exception, status: int
) -> None:
    service = MagicMock()
    service.login = AsyncMock(side_effect=error)

    with patch("cinecatalog.api.routes.auth.AuthService", return_value=service):
        response = await request(
            test_app, "POST", "/api/v1/auth/login", json={"email": "a@b.co", "password": "x"}
        )

    assert response.status_code == status
    assert response.json()["success"] is False


async def test_profile_requires_token(test_app: FastAPI, override_db: MagicMock) -> None:
    response = await request(test_app, "GET", "/api/v1/auth/profile")

    assert response.status_code == 401
    assert response.json()["error"]["details"] == "No token provided"


async def test_profile_rejects_refresh_token_as_bearer(
    test_app: FastAPI, override_db: MagicMock
) -> None:
    token = create_refresh_token(make_user())

    response = await request(
        test_app, "GET", "/api/v1/auth/profile", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid token"


async def test_profile_returns_current_user(test_app: FastAPI, override_db: MagicMock) -> None:
    user = make_user()
    override_db.get = AsyncMock(return_value=user)

    response = await request(test_app, "GET", "/api/v1/auth/profile", headers=auth_header(user))

    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == "user-1"


async def test_inactive_user_is_forbidden(test_app: FastAPI, override_db: MagicMock) -> None:
    user = make_user(is_active=False)
    override_db.get = AsyncMock(return_value=user)

    response = await request(test_app, "GET", "/api/v1/auth/profile", headers=auth_header(user))

    assert response.status_code == 403


async def test_user_listing_requires_admin_role(test_app: FastAPI, override_db: MagicMock) -> None:
    user = make_user(role="user")
    override_db.get = AsyncMock(return_value=user)

    response = await request(test_app, "GET", "/api/v1/auth/users", headers=auth_header(user))

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Admin privileges required"


async def test_admin_can_list_users(test_app: FastAPI, override_db: MagicMock) -> None:
    admin = make_user(id="admin-1", role="admin")
    override_db.get = AsyncMock(return_value=admin)
    service = MagicMock()
    service.list_users = AsyncMock(return_value=Page(items=[admin], total=1, page=1, limit=10))

    with patch("cinecatalog.api.routes.auth.AuthService", return_value=service):
        response = await request(
            test_app,
            "GET",
            "/api/v1/auth/users",
            params={"role": "admin"},
            headers=auth_header(admin),
        )

    assert response.status_code == 200
    assert response.json()["data"]["users"][0]["role"] == "admin"
    assert service.list_users.call_args.args[2] == "admin"


async def test_admin_delete_passes_own_id(test_app: FastAPI, override_db: MagicMock) -> None:
    admin = make_user(id="admin-1", role="admin")
    override_db.get = AsyncMock(return_value=admin)
    service = MagicMock()
    service.deactivate_user = AsyncMock(return_value=make_user(is_active=False))

    with patch("cinecatalog.api.routes.auth.AuthService", return_value=service):
        response = await request(
            test_app, "DELETE", "/api/v1/auth/users/user-1", headers=auth_header(admin)
        )

    assert response.status_code == 200
    service.deactivate_user.assert_awaited_once_with("user-1", "admin-1")
    assert response.json()["data"]["user"]["isActive"] is False

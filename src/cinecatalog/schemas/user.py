"""Pydantic schemas for authentication and user management."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from cinecatalog.schemas.common import CamelModel, InputModel, Pagination, UpdateModel
from cinecatalog.schemas.producer import EMAIL_PATTERN

Role = Literal["user", "admin"]

USER_NAME_PATTERN = r"^[A-Za-zÁÉÍÓÚáéíóúÑñ\s]+$"


class RegisterRequest(InputModel):
    first_name: str = Field(min_length=2, max_length=50, pattern=USER_NAME_PATTERN)
    last_name: str = Field(min_length=2, max_length=50, pattern=USER_NAME_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=6, max_length=128)
    role: Role = "user"


class LoginRequest(InputModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RefreshTokenRequest(InputModel):
    refresh_token: str = Field(min_length=1)


class ProfileUpdate(UpdateModel):
    first_name: str | None = Field(
        default=None, min_length=2, max_length=50, pattern=USER_NAME_PATTERN
    )
    last_name: str | None = Field(
        default=None, min_length=2, max_length=50, pattern=USER_NAME_PATTERN
    )
    avatar: str | None = Field(default=None, max_length=500)


class ChangePasswordRequest(InputModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)


class UserAdminUpdate(ProfileUpdate):
    role: Role | None = None
    is_active: bool | None = None


class UserResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    full_name: str | None = None
    email: str
    role: str
    is_active: bool = True
    avatar: str = ""
    last_login: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthPayload(CamelModel):
    user: UserResponse
    token: str
    refresh_token: str


class AccessToken(CamelModel):
    token: str


class UserList(CamelModel):
    users: list[UserResponse]
    pagination: Pagination


class UserDetail(CamelModel):
    user: UserResponse


class RoleCount(CamelModel):
    role: str
    count: int


class UserStats(CamelModel):
    total: int
    active: int
    inactive: int
    by_role: list[RoleCount]
    recent_users: list[UserResponse]

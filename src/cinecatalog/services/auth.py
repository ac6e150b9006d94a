"""
User accounts and JWT authentication.

Access tokens are short-lived JWTs carrying the user id and role. Refresh
tokens are signed with a separate secret and the current one is stored on the
user row, so logging out (clearing it) revokes it.
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

import bcrypt
import jwt
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.config import settings
from cinecatalog.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cinecatalog.models.user import User
from cinecatalog.schemas.user import (
    ChangePasswordRequest,
    ProfileUpdate,
    RegisterRequest,
    UserAdminUpdate,
)
from cinecatalog.services.query_engine import ListQuery, Page, build_filters, paginate

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


class UserSort(str, Enum):
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    ROLE = "role"
    CREATED_AT = "createdAt"
    LAST_LOGIN = "lastLogin"


USER_SORT_COLUMNS = {
    UserSort.FIRST_NAME: User.first_name,
    UserSort.LAST_NAME: User.last_name,
    UserSort.EMAIL: User.email,
    UserSort.ROLE: User.role,
    UserSort.CREATED_AT: User.created_at,
    UserSort.LAST_LOGIN: User.last_login,
}


# ---------------------------------------------------------------------------
# Passwords and tokens
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False


def create_access_token(user: User, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "role": user.role,
        "type": ACCESS,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_refresh_token(user: User, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "type": REFRESH,
        "iat": now,
        "exp": now + timedelta(days=settings.refresh_token_expire_days),
    }
    return jwt.encode(payload, settings.jwt_refresh_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, token_type: str = ACCESS) -> dict[str, Any]:
    """
    Verify a token's signature, expiry and type.

    Raises:
        AuthError: If the token is expired, malformed or of the wrong type
    """
    secret = settings.jwt_secret if token_type == ACCESS else settings.jwt_refresh_secret
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise AuthError("Token expired", "Log in again to obtain a new token") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthError("Invalid token", str(exc)) from exc

    if payload.get("type") != token_type or not payload.get("sub"):
        raise AuthError("Invalid token", f"Token type must be {token_type!r}")
    return payload


# ---------------------------------------------------------------------------
# Account operations
# ---------------------------------------------------------------------------


class AuthService:
    """Registration, login and user administration."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_user(self, user_id: str) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("user", user_id)
        return user

    async def find_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def register(self, data: RegisterRequest) -> tuple[User, str, str]:
        if await self.find_by_email(data.email) is not None:
            raise ConflictError("Email is already registered")

        # Only the very first account may make itself an administrator
        role = "user"
        if data.role == "admin":
            user_count = (await self.db.execute(select(func.count()).select_from(User))).scalar_one()
            if user_count == 0:
                role = "admin"

        user = User(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            password_hash=hash_password(data.password),
            role=role,
            is_active=True,
        )
        try:
            async with self.db.begin_nested():
                self.db.add(user)
                await self.db.flush()
        except IntegrityError as exc:
            raise ConflictError("Email is already registered") from exc

        access, refresh = self._issue_tokens(user)
        await self.db.flush()
        logger.info(f"Registered user {user.id} ({user.email}) as {user.role}")
        return user, access, refresh

    async def login(self, email: str, password: str) -> tuple[User, str, str]:
        user = await self.find_by_email(email)
        if user is None:
            raise AuthError("Invalid credentials")
        if not user.is_active:
            raise PermissionDeniedError("User is inactive. Contact an administrator")
        if not verify_password(password, user.password_hash):
            logger.info(f"Failed login for {user.email}")
            raise AuthError("Invalid credentials")

        access, refresh = self._issue_tokens(user)
        await self.db.flush()
        logger.info(f"User {user.id} logged in")
        return user, access, refresh

    def _issue_tokens(self, user: User) -> tuple[str, str]:
        now = datetime.now(timezone.utc)
        access = create_access_token(user, now)
        refresh = create_refresh_token(user, now)
        user.refresh_token = refresh
        user.last_login = now
        return access, refresh

    async def logout(self, user: User) -> None:
        user.refresh_token = None
        await self.db.flush()
        logger.info(f"User {user.id} logged out")

    async def refresh(self, refresh_token: str) -> str:
        """Exchange the stored refresh token for a new access token."""
        payload = decode_token(refresh_token, REFRESH)
        user = await self.db.get(User, payload["sub"])
        if user is None or user.refresh_token != refresh_token:
            raise AuthError("Invalid refresh token")
        if not user.is_active:
            raise PermissionDeniedError("User is inactive")
        return create_access_token(user)

    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(user, key, value)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def change_password(self, user: User, data: ChangePasswordRequest) -> None:
        if not verify_password(data.current_password, user.password_hash):
            raise AuthError("Current password is incorrect")
        user.password_hash = hash_password(data.new_password)
        await self.db.flush()
        logger.info(f"User {user.id} changed password")

    # -- administration ------------------------------------------------------

    async def list_users(
        self, query: ListQuery, sort: UserSort = UserSort.CREATED_AT, role: str | None = None
    ) -> Page[User]:
        extra = [User.role == role if role and role != "all" else None]
        search_columns = [User.first_name, User.last_name, User.email]
        filters = build_filters(User, query, search_columns, extra)
        return await paginate(self.db, User, query, USER_SORT_COLUMNS[sort], filters)

    async def update_user(self, user_id: str, data: UserAdminUpdate) -> User:
        user = await self.get_user(user_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(user, key, value)
        await self.db.flush()
        await self.db.refresh(user)
        logger.info(f"Updated user {user_id}")
        return user

    async def deactivate_user(self, user_id: str, actor_id: str) -> User:
        if user_id == actor_id:
            raise ValidationError("You cannot delete your own account")
        user = await self.get_user(user_id)
        user.is_active = False
        user.refresh_token = None
        await self.db.flush()
        logger.info(f"Deactivated user {user_id} by {actor_id}")
        return user

    async def stats(self) -> dict[str, Any]:
        rows = (
            await self.db.execute(
                select(User.role, User.is_active, func.count()).group_by(User.role, User.is_active)
            )
        ).all()

        by_role: dict[str, int] = {}
        active = inactive = 0
        for role, is_active, count in rows:
            by_role[role] = by_role.get(role, 0) + count
            if is_active:
                active += count
            else:
                inactive += count

        recent = (
            await self.db.execute(select(User).order_by(User.created_at.desc()).limit(5))
        ).scalars().all()

        return {
            "total": active + inactive,
            "active": active,
            "inactive": inactive,
            "by_role": [{"role": role, "count": count} for role, count in sorted(by_role.items())],
            "recent_users": list(recent),
        }

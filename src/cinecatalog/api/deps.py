"""Shared FastAPI dependencies: list parameters, the acting user and services."""

import logging

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import SYSTEM_ACTOR, Actor
from cinecatalog.config import settings
from cinecatalog.database import get_db
from cinecatalog.exceptions import AuthError, PermissionDeniedError
from cinecatalog.models.user import User
from cinecatalog.schemas.common import ActiveFilter, SortOrder
from cinecatalog.services.auth import decode_token
from cinecatalog.services.query_engine import ListQuery

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def list_query(
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        description=f"Items per page; values above {settings.max_page_size} are capped",
    ),
    order: SortOrder = Query(SortOrder.ASC, description="Sort direction"),
    active: ActiveFilter = Query(ActiveFilter.TRUE, description="true, false or all"),
    search: str = Query("", description="Case-insensitive text search"),
) -> ListQuery:
    return ListQuery(page=page, limit=limit, order=order, active=active, search=search)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user."""
    if credentials is None:
        raise AuthError("Access denied", "No token provided")

    payload = decode_token(credentials.credentials)
    user = await db.get(User, payload["sub"])
    if user is None:
        raise AuthError("Invalid token", "User no longer exists")
    if not user.is_active:
        raise PermissionDeniedError("User is inactive")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise PermissionDeniedError("Admin privileges required")
    return user


async def get_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Actor:
    """
    Optional authentication for catalog writes.

    Anonymous callers, and callers whose token cannot be used, act as the
    system actor.
    """
    if credentials is None:
        return SYSTEM_ACTOR
    try:
        payload = decode_token(credentials.credentials)
    except AuthError as exc:
        logger.debug(f"Ignoring unusable token on optional-auth route: {exc.message}")
        return SYSTEM_ACTOR

    user = await db.get(User, payload["sub"])
    if user is None or not user.is_active:
        return SYSTEM_ACTOR
    return Actor(id=user.id, role=user.role)

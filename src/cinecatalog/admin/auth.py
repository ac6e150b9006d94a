"""SQLAdmin authentication backend backed by the users table."""

import logging

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from cinecatalog.database import AsyncSessionLocal
from cinecatalog.models.user import User
from cinecatalog.services.auth import AuthService, verify_password

logger = logging.getLogger(__name__)


class AdminAuth(AuthenticationBackend):
    """Only active users with the admin role may sign in to the back-office."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = str(form.get("username") or "")
        password = str(form.get("password") or "")

        async with AsyncSessionLocal() as session:
            user = await AuthService(session).find_by_email(email)

        ok = (
            user is not None
            and user.is_active
            and user.role == "admin"
            and verify_password(password, user.password_hash)
        )
        if ok:
            request.session.update({"user_id": user.id})
            logger.info(f"Admin {user.id} signed in to the back-office")
        return ok

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        user_id = request.session.get("user_id")
        if not user_id:
            return False
        async with AsyncSessionLocal() as session:
            user = await session.get(User, user_id)
        return user is not None and user.is_active and user.role == "admin"

"""
Create the first administrator account.

Usage:
    python -m cinecatalog.scripts.create_admin --email admin@example.com --password secret123
"""

import argparse
import asyncio
import logging

from sqlalchemy import func, select

from cinecatalog.database import AsyncSessionLocal
from cinecatalog.models.user import User
from cinecatalog.services.auth import hash_password

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


async def create_admin(email: str, password: str, first_name: str, last_name: str) -> User | None:
    """Create an admin unless one already exists; returns the new user or None."""
    async with AsyncSessionLocal() as session:
        admin_count = (
            await session.execute(
                select(func.count()).select_from(User).where(User.role == "admin")
            )
        ).scalar_one()
        if admin_count > 0:
            logger.info(f"{admin_count} administrator(s) already exist, nothing to do")
            return None

        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
            role="admin",
            is_active=True,
        )
        session.add(user)
        await session.commit()
        logger.info(f"Created administrator {user.email} ({user.id})")
        return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the first administrator account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    args = parser.parse_args()

    if len(args.password) < 6:
        parser.error("password must be at least 6 characters")

    asyncio.run(create_admin(args.email, args.password, args.first_name, args.last_name))


if __name__ == "__main__":
    main()

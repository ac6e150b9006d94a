"""Declarative base and shared column mixins."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

SYSTEM_ACTOR_ID = "system"


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all ORM models."""


class TimestampMixin:
    """Adds server-maintained created_at / updated_at columns."""

    # Fetch server-generated timestamps with RETURNING so async code never lazy-loads them
    __mapper_args__ = {"eager_defaults": True}

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class CatalogMixin(TimestampMixin):
    """Columns every catalog entity carries: id, soft-delete flag and ownership."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)
    created_by: Mapped[str] = mapped_column(
        String(100), default=SYSTEM_ACTOR_ID, nullable=False
    )

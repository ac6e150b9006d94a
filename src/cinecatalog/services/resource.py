"""
Base service shared by the five catalog resources.

Subclasses describe their model, search columns, sort keys and which Media
column points back at them; list, get, create, update and the guarded
soft-delete are implemented once here.
"""

import logging
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.exceptions import (
    ConflictError,
    NotFoundError,
    ReferentialError,
    ValidationError,
)
from cinecatalog.models.media import Media
from cinecatalog.services.query_engine import ListQuery, Page, build_filters, paginate
from cinecatalog.utils.text import collapse_whitespace

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


class ResourceService(Generic[ModelT]):
    """CRUD operations for one catalog resource kind."""

    model: ClassVar[type]
    # Singular, lower-case name used in messages ("genre", "media")
    resource: ClassVar[str]
    # Column holding the human-facing unique key
    name_field: ClassVar[str] = "name"
    # Sort enum value -> model attribute
    sort_columns: ClassVar[dict[str, Any]] = {}
    default_sort: ClassVar[str] = "name"

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ------------------------------------------------------------------
    # Hooks for subclasses
    # ------------------------------------------------------------------

    def search_columns(self) -> list[Any]:
        return []

    def resource_filters(self, **filters: Any) -> list[ColumnElement[bool] | None]:
        """Predicates for resource-specific query parameters; None values are skipped."""
        return []

    def load_options(self) -> tuple[Any, ...]:
        return ()

    def dependents_clause(self, entity_id: str) -> ColumnElement[bool] | None:
        """Predicate selecting Media that reference ``entity_id``; None if nothing can."""
        return None

    def to_columns(self, values: dict[str, Any]) -> dict[str, Any]:
        """Map validated request fields onto model attributes."""
        return values

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def sort_column(self, sort: Enum | str | None) -> Any:
        key = sort.value if isinstance(sort, Enum) else sort
        return self.sort_columns.get(key or self.default_sort, self.sort_columns[self.default_sort])

    async def list(
        self, query: ListQuery, sort: Enum | str | None = None, **filters: Any
    ) -> Page[ModelT]:
        clauses = build_filters(
            self.model, query, self.search_columns(), self.resource_filters(**filters)
        )
        return await paginate(
            self.db,
            self.model,
            query,
            self.sort_column(sort),
            clauses,
            options=self.load_options(),
        )

    async def list_active(self, **filters: Any) -> "list[ModelT]":
        """All active entities matching the dimension filters, in natural order."""
        clauses = [self.model.is_active.is_(True)]
        clauses += [c for c in self.resource_filters(**filters) if c is not None]
        stmt = (
            select(self.model)
            .where(*clauses)
            .options(*self.load_options())
            .order_by(self.natural_order(), self.model.id)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    def natural_order(self) -> Any:
        return self.sort_column(self.default_sort).asc()

    async def get(self, entity_id: str) -> ModelT:
        stmt = select(self.model).where(self.model.id == entity_id).options(*self.load_options())
        entity = (await self.db.execute(stmt)).scalar_one_or_none()
        if entity is None:
            raise NotFoundError(self.resource, entity_id)
        return entity

    async def count_dependents(self, entity_id: str) -> int:
        """Number of Media (active or not) referencing this entity."""
        clause = self.dependents_clause(entity_id)
        if clause is None:
            return 0
        stmt = select(func.count()).select_from(Media).where(clause)
        return (await self.db.execute(stmt)).scalar_one()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def ensure_unique(self, value: str, exclude_id: str | None = None) -> None:
        """
        Fast-path duplicate check for a friendlier message.

        The functional unique index is what actually guarantees uniqueness;
        see ``_persist`` for the race-safe path.
        """
        column = getattr(self.model, self.name_field)
        stmt = select(self.model.id).where(func.lower(column) == collapse_whitespace(value).lower())
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        stmt = self._unique_scope(stmt)
        existing = (await self.db.execute(stmt.limit(1))).scalar_one_or_none()
        if existing is not None:
            raise self._duplicate_error(value)

    def _unique_scope(self, stmt: Any) -> Any:
        return stmt

    def _duplicate_error(self, value: str) -> ConflictError:
        return ConflictError(
            f"A {self.resource} named '{value}' already exists",
            [{"field": self.name_field, "message": "Value must be unique (case-insensitive)"}],
        )

    async def create(self, data: BaseModel, actor: Actor) -> ModelT:
        values = data.model_dump()
        await self.ensure_unique(values[self.name_field])
        columns = await self.prepare_write(self.to_columns(values))

        entity = self.model(**columns, created_by=actor.id, is_active=True)
        await self._persist(entity, values[self.name_field])
        logger.info(f"Created {self.resource} {entity.id} by {actor.id}")
        return await self.refresh(entity)

    async def update(self, entity_id: str, data: BaseModel) -> ModelT:
        """Partial update: only fields present in the request body change."""
        entity = await self.get(entity_id)
        values = data.model_dump(exclude_unset=True)
        nullable = getattr(data, "nullable_fields", frozenset())
        cleared = [key for key, value in values.items() if value is None and key not in nullable]
        if cleared:
            raise ValidationError(
                "Validation errors",
                [{"field": key, "message": "Field cannot be null"} for key in cleared],
            )

        new_name = values.get(self.name_field)
        if new_name is not None:
            await self.ensure_unique(new_name, exclude_id=entity_id)
        if values.get("is_active") is False and entity.is_active:
            await self._guard_dependents(entity_id)

        columns = await self.prepare_write(self.to_columns(values), entity)
        for key, value in columns.items():
            setattr(entity, key, value)

        await self._persist(entity, new_name or getattr(entity, self.name_field))
        logger.info(f"Updated {self.resource} {entity_id}: {sorted(values)}")
        return await self.refresh(entity)

    async def prepare_write(
        self, columns: dict[str, Any], entity: ModelT | None = None
    ) -> dict[str, Any]:
        """Resolve references before a write; Media overrides this."""
        return columns

    async def refresh(self, entity: ModelT) -> ModelT:
        """Reload server-maintained columns so responses never trigger lazy loads."""
        await self.db.refresh(entity)
        return entity

    async def deactivate(self, entity_id: str) -> ModelT:
        """
        Soft-delete an entity unless Media still references it.

        Deactivating an already inactive entity is a no-op.
        """
        entity = await self.get(entity_id)
        if not entity.is_active:
            return entity

        await self._guard_dependents(entity_id)

        entity.is_active = False
        await self.db.flush()
        logger.info(f"Deactivated {self.resource} {entity_id}")
        return await self.refresh(entity)

    async def _guard_dependents(self, entity_id: str) -> None:
        dependents = await self.count_dependents(entity_id)
        if dependents > 0:
            logger.info(
                f"Refused to deactivate {self.resource} {entity_id}: "
                f"{dependents} media reference it"
            )
            raise ConflictError(
                f"Cannot delete {self.resource}: it is referenced by {dependents} media",
                {
                    "dependents": dependents,
                    "hint": f"Reassign or delete the media that use this {self.resource} first",
                },
            )

    async def _persist(self, entity: ModelT, label: str | None = None) -> None:
        """
        Flush one entity inside a SAVEPOINT.

        Store constraint violations are translated into domain errors, and only
        this entity's changes are rolled back so bulk ingestion can go on.
        """
        try:
            async with self.db.begin_nested():
                self.db.add(entity)
                await self.db.flush()
        except IntegrityError as exc:
            sqlstate = getattr(exc.orig, "sqlstate", None)
            if sqlstate == FOREIGN_KEY_VIOLATION:
                raise ReferentialError(
                    f"The {self.resource} references an entity that does not exist"
                ) from exc
            if sqlstate == UNIQUE_VIOLATION:
                raise self._duplicate_error(label or "") from exc
            logger.warning(f"Rejected {self.resource} write, sqlstate {sqlstate}: {exc.orig}")
            raise ValidationError(
                f"The {self.resource} violates a store constraint",
                {"sqlstate": sqlstate},
            ) from exc

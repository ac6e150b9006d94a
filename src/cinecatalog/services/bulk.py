"""
Best-effort batch creation of catalog entities.

Every item goes through the same schema and service path as a single create,
inside its own SAVEPOINT, so one bad item is reported and skipped while the
rest are still created.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.exceptions import CatalogError
from cinecatalog.schemas.director import DirectorCreate
from cinecatalog.schemas.genre import GenreCreate
from cinecatalog.schemas.media import MediaCreate
from cinecatalog.schemas.media_type import TypeCreate
from cinecatalog.schemas.producer import ProducerCreate
from cinecatalog.services.directors import DirectorService
from cinecatalog.services.genres import GenreService
from cinecatalog.services.media import MediaService
from cinecatalog.services.media_types import MediaTypeService
from cinecatalog.services.producers import ProducerService
from cinecatalog.services.resource import ResourceService

logger = logging.getLogger(__name__)

# Dependencies first so media can point at entities created in the same call
KIND_ORDER = ("genres", "directors", "producers", "types", "media")

KINDS: dict[str, tuple[type[ResourceService], type[BaseModel]]] = {
    "genres": (GenreService, GenreCreate),
    "directors": (DirectorService, DirectorCreate),
    "producers": (ProducerService, ProducerCreate),
    "types": (MediaTypeService, TypeCreate),
    "media": (MediaService, MediaCreate),
}

# Media field -> kind whose correlation keys it may use
MEDIA_REFERENCE_KINDS = {
    "type": "types",
    "director": "directors",
    "producer": "producers",
}

REF_KEY = "ref"


@dataclass
class KindResult:
    """Outcome of ingesting one list of items."""

    total: int
    inserted_ids: list[str] = field(default_factory=list)
    failed: list[dict[str, Any]] = field(default_factory=list)
    refs: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def created(self) -> int:
        return 0 if self.error else len(self.inserted_ids)

    def as_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"error": self.error, "created": 0, "total": self.total}
        result: dict[str, Any] = {
            "created": self.created,
            "total": self.total,
            "insertedIds": self.inserted_ids,
            "failed": self.failed,
        }
        if self.refs:
            result["refs"] = self.refs
        return result


def describe_schema_error(exc: SchemaValidationError) -> str:
    """One-line summary of pydantic errors, e.g. "name: String should have at least 2 characters"."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', '')}" if location else error.get("msg", ""))
    return "; ".join(parts)


class BulkIngestor:
    """Creates lists of entities on behalf of one actor."""

    def __init__(self, db: AsyncSession, actor: Actor) -> None:
        self.db = db
        self.actor = actor
        # kind -> {client ref -> created id}
        self.refs: dict[str, dict[str, str]] = {kind: {} for kind in KIND_ORDER}

    async def ingest(self, kind: str, items: list[Any]) -> KindResult:
        """
        Create every valid item of one kind.

        Item-level problems (schema violations, duplicates, missing references)
        are collected in ``failed``. Anything unexpected rolls back the whole
        kind and is reported as a kind-level ``error`` instead of raising.
        """
        service_cls, schema = KINDS[kind]
        service = service_cls(self.db)
        result = KindResult(total=len(items))

        try:
            async with self.db.begin_nested():
                for index, raw in enumerate(items):
                    await self._ingest_item(kind, service, schema, index, raw, result)
        except SQLAlchemyError as exc:
            logger.error(f"Bulk {kind} failed: {exc}", exc_info=exc)
            result.error = str(exc)
            result.inserted_ids.clear()
            result.refs.clear()
            return result

        self.refs[kind].update(result.refs)
        logger.info(
            f"Bulk {kind} by {self.actor.id}: created {result.created} of {result.total}"
        )
        return result

    async def _ingest_item(
        self,
        kind: str,
        service: ResourceService,
        schema: type[BaseModel],
        index: int,
        raw: Any,
        result: KindResult,
    ) -> None:
        if not isinstance(raw, dict):
            result.failed.append({"index": index, "error": "Item must be an object"})
            return

        item = dict(raw)
        ref = item.pop(REF_KEY, None)
        if kind == "media":
            item = self.resolve_media_refs(item)

        try:
            data = schema.model_validate(item)
            entity = await service.create(data, self.actor)
        except SchemaValidationError as exc:
            error = describe_schema_error(exc)
        except CatalogError as exc:
            error = exc.message
        else:
            result.inserted_ids.append(entity.id)
            if ref is not None:
                result.refs[str(ref)] = entity.id
            return

        logger.warning(f"Bulk {kind} item {index} rejected: {error}")
        result.failed.append({"index": index, "error": error})

    def resolve_media_refs(self, item: dict[str, Any]) -> dict[str, Any]:
        """
        Replace correlation keys in a media item with the ids created for them.

        Values that are not known keys are left alone and treated as real ids.
        """
        for field_name, kind in MEDIA_REFERENCE_KINDS.items():
            value = item.get(field_name)
            if isinstance(value, str) and value in self.refs[kind]:
                item[field_name] = self.refs[kind][value]

        genres = item.get("genres")
        if isinstance(genres, list):
            known = self.refs["genres"]
            item["genres"] = [
                known.get(value, value) if isinstance(value, str) else value for value in genres
            ]
        return item

    async def ingest_all(self, bundle: dict[str, list[Any] | None]) -> dict[str, Any]:
        """Ingest a mixed bundle kind by kind; totals cover every kind present."""
        summary: dict[str, Any] = {}
        total_created = total_requested = 0

        for kind in KIND_ORDER:
            items = bundle.get(kind)
            if not items:
                continue
            result = await self.ingest(kind, items)
            summary[kind] = result.as_dict()
            total_created += result.created
            total_requested += result.total

        summary["totalCreated"] = total_created
        summary["totalRequested"] = total_requested
        logger.info(
            f"Bulk bundle by {self.actor.id}: created {total_created} of {total_requested}"
        )
        return summary

"""Media type service."""

from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement

from cinecatalog.models.media import Media
from cinecatalog.models.media_type import MediaType
from cinecatalog.services.resource import ResourceService


class TypeSort(str, Enum):
    NAME = "name"
    CATEGORY = "category"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class MediaTypeService(ResourceService[MediaType]):
    model = MediaType
    resource = "type"
    sort_columns = {
        TypeSort.NAME.value: MediaType.name,
        TypeSort.CATEGORY.value: MediaType.category,
        TypeSort.CREATED_AT.value: MediaType.created_at,
        TypeSort.UPDATED_AT.value: MediaType.updated_at,
    }

    def search_columns(self) -> list[Any]:
        return [MediaType.name, MediaType.description, MediaType.category]

    def resource_filters(
        self, category: str | None = None, platform: str | None = None, **_: Any
    ) -> list[ColumnElement[bool] | None]:
        return [
            MediaType.category == category if category else None,
            MediaType.platforms.any(platform) if platform else None,
        ]

    def dependents_clause(self, entity_id: str) -> ColumnElement[bool]:
        return Media.type_id == entity_id

"""Genre service."""

import logging
from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement

from cinecatalog.models.genre import Genre
from cinecatalog.models.media import Media
from cinecatalog.services.query_engine import array_text
from cinecatalog.services.resource import ResourceService

logger = logging.getLogger(__name__)


class GenreSort(str, Enum):
    NAME = "name"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class GenreService(ResourceService[Genre]):
    model = Genre
    resource = "genre"
    sort_columns = {
        GenreSort.NAME.value: Genre.name,
        GenreSort.CREATED_AT.value: Genre.created_at,
        GenreSort.UPDATED_AT.value: Genre.updated_at,
    }

    def search_columns(self) -> list[Any]:
        return [Genre.name, Genre.description, array_text(Genre.tags)]

    def dependents_clause(self, entity_id: str) -> ColumnElement[bool]:
        return Media.genres.any(Genre.id == entity_id)

    async def permanent_delete(self, entity_id: str) -> Genre:
        """Physically remove a genre; refused while any media uses it."""
        genre = await self.get(entity_id)
        await self._guard_dependents(entity_id)

        await self.db.delete(genre)
        await self.db.flush()
        logger.info(f"Permanently deleted genre {entity_id} ({genre.name})")
        return genre

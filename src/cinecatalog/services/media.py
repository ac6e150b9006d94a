"""Media service: referential checks on write and expanded references on read."""

import logging
from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.orm import selectinload

from cinecatalog.exceptions import ConflictError, ReferentialError
from cinecatalog.models.director import Director
from cinecatalog.models.genre import Genre
from cinecatalog.models.media import Media
from cinecatalog.models.media_type import MediaType
from cinecatalog.models.producer import Producer
from cinecatalog.services.query_engine import array_text, json_array_values, year_range
from cinecatalog.services.resource import ResourceService

logger = logging.getLogger(__name__)

# Request field -> (model, foreign key column, label used in error details)
REFERENCES = {
    "type": (MediaType, "type_id", "Type"),
    "director": (Director, "director_id", "Director"),
    "producer": (Producer, "producer_id", "Producer"),
}


class MediaSort(str, Enum):
    TITLE = "title"
    RELEASE_DATE = "releaseDate"
    DURATION = "duration"
    RATING = "rating"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class MediaService(ResourceService[Media]):
    model = Media
    resource = "media"
    name_field = "title"
    default_sort = MediaSort.TITLE.value
    sort_columns = {
        MediaSort.TITLE.value: Media.title,
        MediaSort.RELEASE_DATE.value: Media.release_date,
        MediaSort.DURATION.value: Media.duration,
        MediaSort.RATING.value: Media.average_rating,
        MediaSort.CREATED_AT.value: Media.created_at,
        MediaSort.UPDATED_AT.value: Media.updated_at,
    }

    def search_columns(self) -> list[Any]:
        return [
            Media.title,
            Media.synopsis,
            json_array_values(Media.cast, "actor"),
            array_text(Media.tags),
        ]

    def resource_filters(
        self,
        type: str | None = None,
        director: str | None = None,
        producer: str | None = None,
        genre: str | None = None,
        year: int | None = None,
        rating: float | None = None,
        **_: Any,
    ) -> list[ColumnElement[bool] | None]:
        return [
            Media.type_id == type if type else None,
            Media.director_id == director if director else None,
            Media.producer_id == producer if producer else None,
            Media.genres.any(Genre.id == genre) if genre else None,
            year_range(Media.release_date, year) if year is not None else None,
            Media.average_rating >= rating if rating is not None else None,
        ]

    def load_options(self) -> tuple[Any, ...]:
        return (
            selectinload(Media.media_type),
            selectinload(Media.director),
            selectinload(Media.producer),
            selectinload(Media.genres),
        )

    def natural_order(self) -> Any:
        # Dimension listings show the newest releases first
        return Media.release_date.desc()

    def _unique_scope(self, stmt: Select) -> Select:
        return stmt.where(Media.is_active.is_(True))

    def _duplicate_error(self, value: str) -> ConflictError:
        error = super()._duplicate_error(value)
        error.message = f"Active media titled '{value}' already exists"
        return error

    def to_columns(self, values: dict[str, Any]) -> dict[str, Any]:
        columns = dict(values)
        for field, (_, column, _) in REFERENCES.items():
            if field in columns:
                columns[column] = columns.pop(field)
        return columns

    async def prepare_write(
        self, columns: dict[str, Any], entity: Media | None = None
    ) -> dict[str, Any]:
        """
        Check that every referenced entity exists and load the genre rows.

        All missing references are reported together, one detail per field.
        """
        details: list[dict[str, str]] = []

        for field, (model, column, label) in REFERENCES.items():
            ref_id = columns.get(column)
            if ref_id is None:
                continue
            if await self.db.get(model, ref_id) is None:
                details.append(
                    {"field": field, "message": f"{label} with ID {ref_id} does not exist"}
                )

        if "genres" in columns:
            genre_ids = list(dict.fromkeys(columns["genres"]))
            result = await self.db.execute(select(Genre).where(Genre.id.in_(genre_ids)))
            found = {genre.id: genre for genre in result.scalars().all()}
            missing = [genre_id for genre_id in genre_ids if genre_id not in found]
            if missing:
                details.append(
                    {
                        "field": "genres",
                        "message": f"Genres do not exist: {', '.join(missing)}",
                    }
                )
            columns["genres"] = [found[g] for g in genre_ids if g in found]

        if details:
            logger.info(f"Rejected media write with missing references: {details}")
            raise ReferentialError("Media references entities that do not exist", details)
        return columns

    async def refresh(self, entity: Media) -> Media:
        stmt = (
            select(Media)
            .where(Media.id == entity.id)
            .options(*self.load_options())
            .execution_options(populate_existing=True)
        )
        return (await self.db.execute(stmt)).scalar_one()

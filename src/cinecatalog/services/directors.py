"""Director service."""

from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement

from cinecatalog.models.director import Director
from cinecatalog.models.media import Media
from cinecatalog.services.query_engine import contains
from cinecatalog.services.resource import ResourceService


class DirectorSort(str, Enum):
    NAME = "name"
    NATIONALITY = "nationality"
    BIRTH_DATE = "birthDate"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class DirectorService(ResourceService[Director]):
    model = Director
    resource = "director"
    sort_columns = {
        DirectorSort.NAME.value: Director.name,
        DirectorSort.NATIONALITY.value: Director.nationality,
        DirectorSort.BIRTH_DATE.value: Director.birth_date,
        DirectorSort.CREATED_AT.value: Director.created_at,
        DirectorSort.UPDATED_AT.value: Director.updated_at,
    }

    def search_columns(self) -> list[Any]:
        return [Director.name, Director.biography, Director.nationality]

    def resource_filters(
        self, nationality: str | None = None, **_: Any
    ) -> list[ColumnElement[bool] | None]:
        return [contains(Director.nationality, nationality) if nationality else None]

    def dependents_clause(self, entity_id: str) -> ColumnElement[bool]:
        return Media.director_id == entity_id

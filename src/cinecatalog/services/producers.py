"""Producer service."""

from enum import Enum
from typing import Any

from sqlalchemy import ColumnElement

from cinecatalog.models.media import Media
from cinecatalog.models.producer import Producer
from cinecatalog.services.query_engine import contains
from cinecatalog.services.resource import ResourceService


class ProducerSort(str, Enum):
    NAME = "name"
    FOUNDED_YEAR = "foundedYear"
    COUNTRY = "country"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class ProducerService(ResourceService[Producer]):
    model = Producer
    resource = "producer"
    sort_columns = {
        ProducerSort.NAME.value: Producer.name,
        ProducerSort.FOUNDED_YEAR.value: Producer.founded_year,
        ProducerSort.COUNTRY.value: Producer.country,
        ProducerSort.CREATED_AT.value: Producer.created_at,
        ProducerSort.UPDATED_AT.value: Producer.updated_at,
    }

    def search_columns(self) -> list[Any]:
        return [
            Producer.name,
            Producer.description,
            Producer.country,
            Producer.headquarters["city"].astext,
        ]

    def resource_filters(
        self, country: str | None = None, specialty: str | None = None, **_: Any
    ) -> list[ColumnElement[bool] | None]:
        return [
            contains(Producer.country, country) if country else None,
            Producer.specialties.any(specialty.strip().lower()) if specialty else None,
        ]

    def dependents_clause(self, entity_id: str) -> ColumnElement[bool]:
        return Media.producer_id == entity_id

"""Shared response envelope, pagination and list query schemas."""

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Letters (including Spanish accents), spaces and hyphens
NAME_PATTERN = r"^[A-Za-zÁÉÍÓÚáéíóúÑñÜü\s\-]+$"
# As above, plus dots for initials ("J. R. R.")
PERSON_NAME_PATTERN = r"^[A-Za-zÁÉÍÓÚáéíóúÑñÜü\s.\-]+$"
URL_PATTERN = r"^https?://.+"


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names while accepting either case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful response."""

    success: bool = True
    data: T | None = None
    message: str | None = None


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ActiveFilter(str, Enum):
    TRUE = "true"
    FALSE = "false"
    ALL = "all"


class CatalogResponse(CamelModel):
    """Fields every catalog entity returns."""

    id: str
    is_active: bool = True
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Reference(CamelModel):
    """Minimal ``{id, name}`` display form of a referenced entity."""

    id: str
    name: str


class InputModel(CamelModel):
    """Base for request bodies: surrounding whitespace is stripped from strings."""

    model_config = ConfigDict(str_strip_whitespace=True)


class UpdateModel(InputModel):
    """
    Base for partial updates.

    Omitted fields are left alone. An explicit ``null`` is only accepted for
    fields listed in ``nullable_fields``; it clears the stored value.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError("Field cannot be null")
        return value

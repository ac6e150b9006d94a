"""Pydantic schemas for producers."""

from datetime import date
from typing import Literal

from pydantic import Field, field_validator

from cinecatalog.schemas.common import (
    URL_PATTERN,
    CamelModel,
    CatalogResponse,
    InputModel,
    Pagination,
    UpdateModel,
)

Specialty = Literal[
    "accion",
    "drama",
    "comedia",
    "terror",
    "ciencia-ficcion",
    "romance",
    "thriller",
    "animacion",
    "documental",
    "musical",
    "aventura",
    "fantasia",
    "misterio",
    "crimen",
    "guerra",
    "western",
    "biografia",
    "historia",
    "familia",
    "deportes",
]
Currency = Literal["USD", "EUR", "GBP", "JPY", "CAD", "AUD", "COP", "MXN", "ARS", "BRL"]
BudgetRange = Literal["low", "medium", "high", "blockbuster"]

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


class Headquarters(InputModel):
    city: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=200)
    zip_code: str | None = Field(default=None, max_length=20)


class Contact(InputModel):
    website: str | None = Field(default=None, pattern=URL_PATTERN)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    phone: str | None = Field(default=None, max_length=30)


class Budget(InputModel):
    currency: Currency = "USD"
    range: BudgetRange = "medium"


def _lower_specialties(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    return [item.strip().lower() for item in value]


def _check_founded_year(value: int | None) -> int | None:
    if value is not None and value > date.today().year:
        raise ValueError("Founded year cannot be in the future")
    return value


class ProducerCreate(InputModel):
    name: str = Field(min_length=2, max_length=150)
    description: str = Field(default="", max_length=1000)
    founded_year: int | None = Field(default=None, ge=1800)
    country: str = Field(min_length=2, max_length=50)
    headquarters: Headquarters = Field(default_factory=Headquarters)
    contact: Contact = Field(default_factory=Contact)
    specialties: list[Specialty] = Field(default_factory=list)
    budget: Budget = Field(default_factory=Budget)

    @field_validator("specialties", mode="before")
    @classmethod
    def _lower(cls, value: list[str] | None) -> list[str] | None:
        return _lower_specialties(value)

    @field_validator("founded_year")
    @classmethod
    def _not_in_future(cls, value: int | None) -> int | None:
        return _check_founded_year(value)


class ProducerUpdate(UpdateModel):
    nullable_fields = frozenset({"founded_year"})

    name: str | None = Field(default=None, min_length=2, max_length=150)
    description: str | None = Field(default=None, max_length=1000)
    founded_year: int | None = Field(default=None, ge=1800)
    country: str | None = Field(default=None, min_length=2, max_length=50)
    headquarters: Headquarters | None = None
    contact: Contact | None = None
    specialties: list[Specialty] | None = None
    budget: Budget | None = None
    is_active: bool | None = None

    @field_validator("specialties", mode="before")
    @classmethod
    def _lower(cls, value: list[str] | None) -> list[str] | None:
        return _lower_specialties(value)

    @field_validator("founded_year")
    @classmethod
    def _not_in_future(cls, value: int | None) -> int | None:
        return _check_founded_year(value)


class ProducerResponse(CatalogResponse):
    name: str
    description: str = ""
    founded_year: int | None = None
    country: str
    headquarters: Headquarters | None = None
    contact: Contact | None = None
    specialties: list[str] = Field(default_factory=list)
    budget: Budget | None = None
    years_in_operation: int | None = None
    media_count: int | None = None


class ProducerList(CamelModel):
    producers: list[ProducerResponse]
    pagination: Pagination | None = None


class ProducerDetail(CamelModel):
    producer: ProducerResponse

"""Pydantic schemas for directors."""

from datetime import date

from pydantic import Field, field_validator

from cinecatalog.schemas.common import (
    PERSON_NAME_PATTERN,
    URL_PATTERN,
    CamelModel,
    CatalogResponse,
    InputModel,
    Pagination,
    UpdateModel,
)


def _past_date(value: date | None) -> date | None:
    if value is not None and value > date.today():
        raise ValueError("Birth date cannot be in the future")
    return value


class Award(InputModel):
    name: str = Field(min_length=1, max_length=200)
    year: int = Field(ge=1900)
    category: str = Field(default="", max_length=200)

    @field_validator("year")
    @classmethod
    def _not_after_current_year(cls, value: int) -> int:
        if value > date.today().year:
            raise ValueError("Award year cannot be in the future")
        return value


class SocialMedia(InputModel):
    website: str | None = Field(default=None, pattern=URL_PATTERN)
    twitter: str | None = Field(default=None, max_length=50)
    instagram: str | None = Field(default=None, max_length=50)


class DirectorCreate(InputModel):
    name: str = Field(min_length=2, max_length=100, pattern=PERSON_NAME_PATTERN)
    biography: str = Field(default="", max_length=2000)
    birth_date: date | None = None
    nationality: str | None = Field(default=None, max_length=50)
    awards: list[Award] = Field(default_factory=list)
    social_media: SocialMedia = Field(default_factory=SocialMedia)

    @field_validator("birth_date")
    @classmethod
    def _not_in_future(cls, value: date | None) -> date | None:
        return _past_date(value)


class DirectorUpdate(UpdateModel):
    nullable_fields = frozenset({"birth_date", "nationality"})

    name: str | None = Field(
        default=None, min_length=2, max_length=100, pattern=PERSON_NAME_PATTERN
    )
    biography: str | None = Field(default=None, max_length=2000)
    birth_date: date | None = None
    nationality: str | None = Field(default=None, max_length=50)
    awards: list[Award] | None = None
    social_media: SocialMedia | None = None
    is_active: bool | None = None

    @field_validator("birth_date")
    @classmethod
    def _not_in_future(cls, value: date | None) -> date | None:
        return _past_date(value)


class DirectorResponse(CatalogResponse):
    name: str
    biography: str = ""
    birth_date: date | None = None
    nationality: str | None = None
    awards: list[Award] = Field(default_factory=list)
    social_media: SocialMedia | None = None
    age: int | None = None
    media_count: int | None = None


class DirectorList(CamelModel):
    directors: list[DirectorResponse]
    pagination: Pagination | None = None


class DirectorDetail(CamelModel):
    director: DirectorResponse

"""Pydantic schemas for genres."""

from pydantic import Field

from cinecatalog.schemas.common import (
    NAME_PATTERN,
    CamelModel,
    CatalogResponse,
    InputModel,
    Pagination,
    UpdateModel,
)


class GenreCreate(InputModel):
    name: str = Field(min_length=2, max_length=50, pattern=NAME_PATTERN)
    description: str = Field(default="", max_length=500)
    tags: list[str] = Field(default_factory=list)


class GenreUpdate(UpdateModel):
    """Partial update; only fields present in the body are changed."""

    name: str | None = Field(default=None, min_length=2, max_length=50, pattern=NAME_PATTERN)
    description: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = None
    is_active: bool | None = None


class GenreResponse(CatalogResponse):
    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)

    # Only filled in on get-by-id
    media_count: int | None = None


class GenreList(CamelModel):
    genres: list[GenreResponse]
    pagination: Pagination | None = None


class GenreDetail(CamelModel):
    genre: GenreResponse

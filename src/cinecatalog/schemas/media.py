"""Pydantic schemas for media (movies and series)."""

from datetime import date
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator

from cinecatalog.schemas.common import (
    URL_PATTERN,
    CamelModel,
    CatalogResponse,
    InputModel,
    Pagination,
    Reference,
    UpdateModel,
)

CastRole = Literal["Protagonista", "Antagonista", "Secundario", "Reparto", "Cameo"]
CrewRole = Literal[
    "Guionista",
    "Cinematógrafo",
    "Editor",
    "Compositor",
    "Diseñador de Producción",
    "Diseñador de Vestuario",
    "Maquillaje",
    "Efectos Especiales",
    "Sonido",
    "Otro",
]
SeriesStatus = Literal["En emisión", "Finalizada", "Cancelada", "En pausa", "Próximamente"]


class ImdbRating(InputModel):
    score: float | None = Field(default=None, ge=0, le=10)
    votes: int = Field(default=0, ge=0)


class Rating(InputModel):
    imdb: ImdbRating | None = None
    metacritic: int | None = Field(default=None, ge=0, le=100)
    rotten_tomatoes: int | None = Field(default=None, ge=0, le=100)


class CastMember(InputModel):
    actor: str = Field(min_length=1, max_length=100)
    character: str = Field(default="", max_length=100)
    role: CastRole = "Reparto"


class CrewMember(InputModel):
    name: str = Field(min_length=1, max_length=100)
    role: CrewRole


class Money(InputModel):
    amount: float | None = Field(default=None, ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)


class Technical(InputModel):
    language: str | None = Field(default=None, max_length=50)
    subtitles: list[str] = Field(default_factory=list)
    country: str | None = Field(default=None, max_length=50)
    budget: Money | None = None
    box_office: Money | None = None


class SeriesInfo(InputModel):
    seasons: int | None = Field(default=None, ge=1)
    episodes: int | None = Field(default=None, ge=1)
    status: SeriesStatus | None = None

    @model_validator(mode="after")
    def _seasons_and_episodes_together(self) -> "SeriesInfo":
        if (self.seasons is None) != (self.episodes is None):
            raise ValueError("Seasons and episodes must both be given or both be omitted")
        return self


def _check_release_date(value: date | None) -> date | None:
    if value is None:
        return value
    today = date.today()
    try:
        limit = today.replace(year=today.year + 1)
    except ValueError:
        # 29 February
        limit = today.replace(year=today.year + 1, day=28)
    if value > limit:
        raise ValueError("Release date cannot be more than one year in the future")
    return value


class MediaCreate(InputModel):
    """
    New media entry.

    ``type``, ``director``, ``producer`` and ``genres`` carry ids of existing
    entities; they are checked against the store before anything is written.
    """

    title: str = Field(min_length=1, max_length=200)
    original_title: str | None = Field(default=None, max_length=200)
    synopsis: str = Field(min_length=10, max_length=2000)
    release_date: date
    duration: int = Field(ge=1, le=1000)
    type: str = Field(min_length=1)
    director: str = Field(min_length=1)
    producer: str = Field(min_length=1)
    genres: list[str] = Field(min_length=1)
    rating: Rating = Field(default_factory=Rating)
    cast: list[CastMember] = Field(default_factory=list)
    crew: list[CrewMember] = Field(default_factory=list)
    technical: Technical = Field(default_factory=Technical)
    series_info: SeriesInfo | None = None
    poster: str | None = Field(default=None, pattern=URL_PATTERN)
    trailer: str | None = Field(default=None, pattern=URL_PATTERN)
    tags: list[str] = Field(default_factory=list)

    @field_validator("release_date")
    @classmethod
    def _release_date_limit(cls, value: date) -> date:
        return _check_release_date(value)


class MediaUpdate(UpdateModel):
    nullable_fields = frozenset({"original_title", "series_info", "poster", "trailer"})

    title: str | None = Field(default=None, min_length=1, max_length=200)
    original_title: str | None = Field(default=None, max_length=200)
    synopsis: str | None = Field(default=None, min_length=10, max_length=2000)
    release_date: date | None = None
    duration: int | None = Field(default=None, ge=1, le=1000)
    type: str | None = Field(default=None, min_length=1)
    director: str | None = Field(default=None, min_length=1)
    producer: str | None = Field(default=None, min_length=1)
    genres: list[str] | None = Field(default=None, min_length=1)
    rating: Rating | None = None
    cast: list[CastMember] | None = None
    crew: list[CrewMember] | None = None
    technical: Technical | None = None
    series_info: SeriesInfo | None = None
    poster: str | None = Field(default=None, pattern=URL_PATTERN)
    trailer: str | None = Field(default=None, pattern=URL_PATTERN)
    tags: list[str] | None = None
    is_active: bool | None = None

    @field_validator("release_date")
    @classmethod
    def _release_date_limit(cls, value: date | None) -> date | None:
        return _check_release_date(value)


class TypeRef(Reference):
    category: str | None = None


class DirectorRef(Reference):
    nationality: str | None = None


class ProducerRef(Reference):
    country: str | None = None


class MediaResponse(CatalogResponse):
    title: str
    original_title: str | None = None
    synopsis: str
    release_date: date
    duration: int
    type: TypeRef | None = Field(
        default=None, validation_alias=AliasChoices("media_type", "type")
    )
    director: DirectorRef | None = None
    producer: ProducerRef | None = None
    genres: list[Reference] = Field(default_factory=list)
    rating: Rating | None = None
    average_rating: float | None = None
    cast: list[CastMember] = Field(default_factory=list)
    crew: list[CrewMember] = Field(default_factory=list)
    technical: Technical | None = None
    series_info: SeriesInfo | None = None
    poster: str | None = None
    trailer: str | None = None
    tags: list[str] = Field(default_factory=list)
    year: int | None = None
    duration_formatted: str | None = None


class MediaList(CamelModel):
    media: list[MediaResponse]
    pagination: Pagination | None = None


class MediaDetail(CamelModel):
    media: MediaResponse

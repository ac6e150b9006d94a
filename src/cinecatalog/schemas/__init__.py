"""Pydantic schemas for API requests and responses."""

from cinecatalog.schemas.common import ApiResponse, Pagination
from cinecatalog.schemas.director import (
    DirectorCreate,
    DirectorDetail,
    DirectorList,
    DirectorResponse,
    DirectorUpdate,
)
from cinecatalog.schemas.genre import GenreCreate, GenreDetail, GenreList, GenreResponse, GenreUpdate
from cinecatalog.schemas.media import MediaCreate, MediaDetail, MediaList, MediaResponse, MediaUpdate
from cinecatalog.schemas.media_type import TypeCreate, TypeDetail, TypeList, TypeResponse, TypeUpdate
from cinecatalog.schemas.producer import (
    ProducerCreate,
    ProducerDetail,
    ProducerList,
    ProducerResponse,
    ProducerUpdate,
)

__all__ = [
    "ApiResponse",
    "Pagination",
    "GenreCreate",
    "GenreUpdate",
    "GenreResponse",
    "GenreList",
    "GenreDetail",
    "DirectorCreate",
    "DirectorUpdate",
    "DirectorResponse",
    "DirectorList",
    "DirectorDetail",
    "ProducerCreate",
    "ProducerUpdate",
    "ProducerResponse",
    "ProducerList",
    "ProducerDetail",
    "TypeCreate",
    "TypeUpdate",
    "TypeResponse",
    "TypeList",
    "TypeDetail",
    "MediaCreate",
    "MediaUpdate",
    "MediaResponse",
    "MediaList",
    "MediaDetail",
]

"""Request bodies for bulk ingestion.

Items are kept as raw objects here and validated one by one with the
single-create schema, so that a bad item is reported instead of failing the
whole request.
"""

from typing import Any

from pydantic import BaseModel, Field

# Any JSON value; non-objects are reported per item by the ingestor
RawItems = list[Any]


class BulkGenres(BaseModel):
    genres: RawItems = Field(min_length=1)


class BulkDirectors(BaseModel):
    directors: RawItems = Field(min_length=1)


class BulkProducers(BaseModel):
    producers: RawItems = Field(min_length=1)


class BulkTypes(BaseModel):
    types: RawItems = Field(min_length=1)


class BulkMedia(BaseModel):
    media: RawItems = Field(min_length=1)


class BulkAll(BaseModel):
    genres: RawItems | None = None
    directors: RawItems | None = None
    producers: RawItems | None = None
    types: RawItems | None = None
    media: RawItems | None = None

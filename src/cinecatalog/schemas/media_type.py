"""Pydantic schemas for media types."""

from typing import Literal

from pydantic import Field, model_validator

from cinecatalog.schemas.common import (
    CamelModel,
    CatalogResponse,
    InputModel,
    Pagination,
    UpdateModel,
)

TypeName = Literal[
    "Película",
    "Serie",
    "Documental",
    "Miniserie",
    "Cortometraje",
    "Telefilme",
    "Especial TV",
    "Webserie",
]
Category = Literal["Largometraje", "Serie TV", "Contenido Digital", "Documental", "Especial"]
Format = Literal["Episódico", "Unitario", "Temporadas", "Capítulos", "Único"]
DurationUnit = Literal["minutos", "horas", "episodios", "temporadas"]
Platform = Literal["Cine", "Televisión", "Streaming", "Digital", "Festival", "VOD", "Blu-ray/DVD"]


class Duration(InputModel):
    min: int | None = Field(default=None, gt=0)
    max: int | None = Field(default=None, gt=0)
    unit: DurationUnit = "minutos"

    @model_validator(mode="after")
    def _min_not_above_max(self) -> "Duration":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("Minimum duration cannot exceed maximum duration")
        return self


class TypeCreate(InputModel):
    name: TypeName
    description: str = Field(default="", max_length=500)
    category: Category
    format: Format = "Único"
    duration: Duration = Field(default_factory=Duration)
    characteristics: list[str] = Field(default_factory=list)
    platforms: list[Platform] = Field(default_factory=list)


class TypeUpdate(UpdateModel):
    name: TypeName | None = None
    description: str | None = Field(default=None, max_length=500)
    category: Category | None = None
    format: Format | None = None
    duration: Duration | None = None
    characteristics: list[str] | None = None
    platforms: list[Platform] | None = None
    is_active: bool | None = None


class TypeResponse(CatalogResponse):
    name: str
    description: str = ""
    category: str
    format: str
    duration: Duration | None = None
    characteristics: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    formatted_duration: str | None = None
    is_episodic: bool = False
    media_count: int | None = None


class TypeList(CamelModel):
    types: list[TypeResponse]
    pagination: Pagination | None = None


class TypeDetail(CamelModel):
    type: TypeResponse

"""Media type model (Película, Serie, Documental, ...)."""

from typing import Any

from sqlalchemy import Index, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column, validates

from cinecatalog.models.base import Base, CatalogMixin
from cinecatalog.utils.text import unique_strings

EPISODIC_FORMATS = frozenset({"Episódico", "Temporadas", "Capítulos"})

DEFAULT_DURATION_UNIT = "minutos"


class MediaType(Base, CatalogMixin):
    """
    Kind of media a catalog entry is.

    Stored in the ``types`` table; the API exposes it as "type".
    """

    __tablename__ = "types"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    format: Mapped[str] = mapped_column(String(50), default="Único", nullable=False)

    # {"min": ..., "max": ..., "unit": ...}
    duration: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict, nullable=False)
    characteristics: Mapped[list[str]] = mapped_column(
        ARRAY(String), default=list, nullable=False
    )
    platforms: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)

    @validates("name")
    def _normalise_name(self, key: str, value: str) -> str:
        return value.strip()

    @validates("characteristics", "platforms")
    def _normalise_sets(self, key: str, value: list[str] | None) -> list[str]:
        return unique_strings(value)

    @property
    def is_episodic(self) -> bool:
        return self.format in EPISODIC_FORMATS

    @property
    def formatted_duration(self) -> str:
        """Human readable duration range, e.g. "90-180 minutos"."""
        duration = self.duration or {}
        low, high = duration.get("min"), duration.get("max")
        unit = duration.get("unit") or DEFAULT_DURATION_UNIT
        if low and high:
            return f"{low}-{high} {unit}"
        if low:
            return f"Mínimo {low} {unit}"
        if high:
            return f"Máximo {high} {unit}"
        return "No especificada"

    def __repr__(self) -> str:
        return f"<MediaType(id={self.id!r}, name={self.name!r})>"


Index("uq_types_name_lower", func.lower(MediaType.name), unique=True)

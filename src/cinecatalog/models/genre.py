"""Genre model."""

from sqlalchemy import Index, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, validates

from cinecatalog.models.base import Base, CatalogMixin
from cinecatalog.utils.text import title_case, unique_strings


class Genre(Base, CatalogMixin):
    """
    Film/series genre.

    Names are title-cased on assignment and unique regardless of case;
    tags are stored lower-cased without duplicates.
    """

    __tablename__ = "genres"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    tags: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)

    @validates("name")
    def _normalise_name(self, key: str, value: str) -> str:
        return title_case(value)

    @validates("tags")
    def _normalise_tags(self, key: str, value: list[str] | None) -> list[str]:
        return unique_strings(value, lower=True)

    def __repr__(self) -> str:
        return f"<Genre(id={self.id!r}, name={self.name!r})>"


# Case-insensitive uniqueness is enforced by the store, not only by pre-checks
Index("uq_genres_name_lower", func.lower(Genre.name), unique=True)

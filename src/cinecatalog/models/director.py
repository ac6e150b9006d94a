"""Director model."""

from datetime import date
from typing import Any

from sqlalchemy import Date, Index, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, validates

from cinecatalog.models.base import Base, CatalogMixin
from cinecatalog.utils.text import social_handle, title_case


class Director(Base, CatalogMixin):
    """
    Film/series director.

    Awards and social media links are stored as JSONB documents since they are
    always read and replaced together with the director.
    """

    __tablename__ = "directors"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    biography: Mapped[str] = mapped_column(Text, default="", nullable=False)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    nationality: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)

    # [{"name": ..., "year": ..., "category": ...}]
    awards: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, default=list, nullable=False)
    # {"website": ..., "twitter": ..., "instagram": ...}
    social_media: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict, nullable=False)

    @validates("name")
    def _normalise_name(self, key: str, value: str) -> str:
        return title_case(value)

    @validates("nationality")
    def _normalise_nationality(self, key: str, value: str | None) -> str | None:
        return title_case(value) if value else value

    @validates("social_media")
    def _normalise_social_media(
        self, key: str, value: dict[str, Any] | None
    ) -> dict[str, Any]:
        links = dict(value or {})
        for network in ("twitter", "instagram"):
            if links.get(network):
                links[network] = social_handle(links[network])
        return links

    @property
    def age(self) -> int | None:
        """Age in whole years, or None when the birth date is unknown."""
        if self.birth_date is None:
            return None
        today = date.today()
        had_birthday = (today.month, today.day) >= (self.birth_date.month, self.birth_date.day)
        return today.year - self.birth_date.year - (0 if had_birthday else 1)

    def __repr__(self) -> str:
        return f"<Director(id={self.id!r}, name={self.name!r})>"


Index("uq_directors_name_lower", func.lower(Director.name), unique=True)

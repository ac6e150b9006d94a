"""Media (movie or series) model and its genre association table."""

from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import Column, Date, Float, ForeignKey, Index, Integer, String, Table, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from cinecatalog.models.base import Base, CatalogMixin
from cinecatalog.utils.text import unique_strings

if TYPE_CHECKING:
    from cinecatalog.models.director import Director
    from cinecatalog.models.genre import Genre
    from cinecatalog.models.media_type import MediaType
    from cinecatalog.models.producer import Producer

media_genres = Table(
    "media_genres",
    Base.metadata,
    Column("media_id", String(36), ForeignKey("media.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "genre_id",
        String(36),
        ForeignKey("genres.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    ),
)


def compute_average_rating(rating: dict[str, Any] | None) -> float | None:
    """
    Mean of the available rating sources on a 0-10 scale.

    IMDb scores are used as-is; Metacritic and Rotten Tomatoes percentages are
    divided by 10. Returns None when no source is present.
    """
    if not rating:
        return None

    scores: list[float] = []
    imdb = rating.get("imdb") or {}
    if imdb.get("score") is not None:
        scores.append(float(imdb["score"]))
    if rating.get("metacritic") is not None:
        scores.append(rating["metacritic"] / 10)
    if rating.get("rotten_tomatoes") is not None:
        scores.append(rating["rotten_tomatoes"] / 10)

    if not scores:
        return None
    return round(sum(scores) / len(scores), 1)


class Media(Base, CatalogMixin):
    """
    Catalog entry for a movie or series.

    References one type, director and producer and at least one genre.
    ``average_rating`` is a denormalised column kept in sync with ``rating``
    so it can be filtered and sorted on in SQL.
    """

    __tablename__ = "media"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    original_title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    synopsis: Mapped[str] = mapped_column(Text, nullable=False)
    release_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)

    # Foreign keys
    type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    director_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("directors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    producer_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("producers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # {"imdb": {"score", "votes"}, "metacritic", "rotten_tomatoes"}
    rating: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict, nullable=False)
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True, index=True)

    cast: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, default=list, nullable=False)
    crew: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, default=list, nullable=False)
    # {"language", "subtitles", "country", "budget", "box_office"}
    technical: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict, nullable=False)
    # {"seasons", "episodes", "status"}; only set for series
    series_info: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)

    poster: Mapped[str | None] = mapped_column(String(500), nullable=True)
    trailer: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tags: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)

    # Relationships
    media_type: Mapped["MediaType"] = relationship()
    director: Mapped["Director"] = relationship()
    producer: Mapped["Producer"] = relationship()
    genres: Mapped[list["Genre"]] = relationship(secondary=media_genres)

    @validates("title", "original_title")
    def _strip_title(self, key: str, value: str | None) -> str | None:
        return value.strip() if value else value

    @validates("rating")
    def _sync_average_rating(self, key: str, value: dict[str, Any] | None) -> dict[str, Any]:
        self.average_rating = compute_average_rating(value)
        return value or {}

    @validates("technical")
    def _normalise_technical(self, key: str, value: dict[str, Any] | None) -> dict[str, Any]:
        technical = dict(value or {})
        if "subtitles" in technical:
            technical["subtitles"] = unique_strings(technical["subtitles"])
        return technical

    @validates("tags")
    def _normalise_tags(self, key: str, value: list[str] | None) -> list[str]:
        return unique_strings(value, lower=True)

    @property
    def year(self) -> int | None:
        return self.release_date.year if self.release_date else None

    @property
    def duration_formatted(self) -> str:
        """Duration as "2h 22m", or "45m" below one hour."""
        hours, minutes = divmod(self.duration or 0, 60)
        if hours > 0:
            return f"{hours}h {minutes}m"
        return f"{minutes}m"

    def __repr__(self) -> str:
        return f"<Media(id={self.id!r}, title={self.title!r})>"


# Titles only need to be unique among active entries
Index(
    "uq_media_title_lower_active",
    func.lower(Media.title),
    unique=True,
    postgresql_where=Media.is_active.is_(True),
)

"""SQLAlchemy ORM models."""

from cinecatalog.models.base import Base
from cinecatalog.models.director import Director
from cinecatalog.models.genre import Genre
from cinecatalog.models.media import Media, media_genres
from cinecatalog.models.media_type import MediaType
from cinecatalog.models.producer import Producer
from cinecatalog.models.user import User

__all__ = [
    "Base",
    "Director",
    "Genre",
    "Media",
    "MediaType",
    "Producer",
    "User",
    "media_genres",
]

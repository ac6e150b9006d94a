"""Producer (production company) model."""

from datetime import date
from typing import Any

from sqlalchemy import Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column, validates

from cinecatalog.models.base import Base, CatalogMixin
from cinecatalog.utils.text import title_case, unique_strings

DEFAULT_BUDGET = {"currency": "USD", "range": "medium"}


class Producer(Base, CatalogMixin):
    """
    Production company.

    Headquarters, contact and budget details are nested JSONB documents;
    specialties are a lower-cased set drawn from a closed list of genres.
    """

    __tablename__ = "producers"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    founded_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    country: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # {"city": ..., "address": ..., "zip_code": ...}
    headquarters: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict, nullable=False)
    # {"website": ..., "email": ..., "phone": ...}
    contact: Mapped[dict[str, Any]] = mapped_column(JSONB, default=dict, nullable=False)
    specialties: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)
    budget: Mapped[dict[str, Any]] = mapped_column(
        JSONB, default=lambda: dict(DEFAULT_BUDGET), nullable=False
    )

    @validates("name")
    def _normalise_name(self, key: str, value: str) -> str:
        return title_case(value)

    @validates("country")
    def _normalise_country(self, key: str, value: str) -> str:
        return title_case(value)

    @validates("headquarters")
    def _normalise_headquarters(
        self, key: str, value: dict[str, Any] | None
    ) -> dict[str, Any]:
        headquarters = dict(value or {})
        if headquarters.get("city"):
            headquarters["city"] = title_case(headquarters["city"])
        return headquarters

    @validates("contact")
    def _normalise_contact(self, key: str, value: dict[str, Any] | None) -> dict[str, Any]:
        contact = dict(value or {})
        if contact.get("email"):
            contact["email"] = contact["email"].strip().lower()
        return contact

    @validates("specialties")
    def _normalise_specialties(self, key: str, value: list[str] | None) -> list[str]:
        return unique_strings(value, lower=True)

    @property
    def years_in_operation(self) -> int | None:
        if self.founded_year is None:
            return None
        return date.today().year - self.founded_year

    def __repr__(self) -> str:
        return f"<Producer(id={self.id!r}, name={self.name!r}, country={self.country!r})>"


Index("uq_producers_name_lower", func.lower(Producer.name), unique=True)

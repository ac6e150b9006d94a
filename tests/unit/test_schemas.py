"""Unit tests for request validation rules."""

from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from cinecatalog.schemas.director import Award, DirectorCreate, DirectorUpdate
from cinecatalog.schemas.genre import GenreUpdate
from cinecatalog.schemas.media import MediaCreate, MediaUpdate, SeriesInfo
from cinecatalog.schemas.media_type import Duration, TypeCreate
from cinecatalog.schemas.producer import ProducerCreate, ProducerUpdate
from cinecatalog.schemas.user import UserAdminUpdate

MEDIA = {
    "title": "Inception",
    "synopsis": "A thief who steals corporate secrets through dream-sharing.",
    "releaseDate": "2010-07-16",
    "duration": 148,
    "type": "type-1",
    "director": "director-1",
    "producer": "producer-1",
    "genres": ["genre-1"],
}


class TestDirector:
    def test_birth_date_in_future_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DirectorCreate(name="Greta Gerwig", birth_date=date.today() + timedelta(days=1))

    def test_initials_allowed_in_name(self) -> None:
        assert DirectorCreate(name="J. J. Abrams").name == "J. J. Abrams"

    def test_digits_rejected_in_name(self) -> None:
        with pytest.raises(ValidationError):
            DirectorCreate(name="R2D2")

    def test_award_year_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Award(name="Oscar", year=1899)
        with pytest.raises(ValidationError):
            Award(name="Oscar", year=date.today().year + 1)

    def test_accepts_camel_case_keys(self) -> None:
        director = DirectorCreate.model_validate(
            {"name": "Greta Gerwig", "birthDate": "1983-08-04", "socialMedia": {"twitter": "greta"}}
        )
        assert director.birth_date == date(1983, 8, 4)
        assert director.social_media.twitter == "greta"


class TestProducer:
    def test_specialties_lowered_before_validation(self) -> None:
        producer = ProducerCreate(name="Syncopy", country="UK", specialties=["Drama", " THRILLER "])
        assert producer.specialties == ["drama", "thriller"]

    def test_unknown_specialty_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProducerCreate(name="Syncopy", country="UK", specialties=["cooking"])

    def test_founded_year_not_in_future(self) -> None:
        with pytest.raises(ValidationError):
            ProducerCreate(name="Syncopy", country="UK", founded_year=date.today().year + 1)

    def test_contact_email_format(self) -> None:
        with pytest.raises(ValidationError):
            ProducerCreate(name="Syncopy", country="UK", contact={"email": "not-an-email"})


class TestMediaType:
    def test_min_duration_cannot_exceed_max(self) -> None:
        with pytest.raises(ValidationError):
            Duration(min=120, max=90)

    def test_defaults(self) -> None:
        media_type = TypeCreate(name="Película", category="Largometraje")
        assert media_type.format == "Único"
        assert media_type.duration.unit == "minutos"

    def test_unknown_platform_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TypeCreate(name="Serie", category="Serie TV", platforms=["Teletext"])


class TestMedia:
    def test_valid_payload(self) -> None:
        media = MediaCreate.model_validate(MEDIA)
        assert media.release_date == date(2010, 7, 16)
        assert media.rating.imdb is None

    def test_release_date_up_to_one_year_ahead(self) -> None:
        soon = date.today() + timedelta(days=200)
        later = date.today() + timedelta(days=400)

        assert MediaCreate.model_validate({**MEDIA, "releaseDate": soon.isoformat()})
        with pytest.raises(ValidationError):
            MediaCreate.model_validate({**MEDIA, "releaseDate": later.isoformat()})

    def test_rating_sources_bounded(self) -> None:
        with pytest.raises(ValidationError):
            MediaCreate.model_validate({**MEDIA, "rating": {"metacritic": 101}})
        with pytest.raises(ValidationError):
            MediaCreate.model_validate({**MEDIA, "rating": {"imdb": {"score": 10.5}}})

    def test_series_info_seasons_and_episodes_together(self) -> None:
        assert SeriesInfo(seasons=2, episodes=16).episodes == 16
        assert SeriesInfo(status="Finalizada").seasons is None
        with pytest.raises(ValidationError):
            SeriesInfo(episodes=16)

    def test_poster_must_be_url(self) -> None:
        with pytest.raises(ValidationError):
            MediaCreate.model_validate({**MEDIA, "poster": "poster.jpg"})


class TestPartialUpdates:
    @pytest.mark.parametrize(
        ("schema", "body"),
        [
            (GenreUpdate, {"name": None}),
            (GenreUpdate, {"description": None}),
            (GenreUpdate, {"isActive": None}),
            (MediaUpdate, {"genres": None}),
            (MediaUpdate, {"type": None}),
            (MediaUpdate, {"rating": None}),
            (ProducerUpdate, {"country": None}),
            (UserAdminUpdate, {"role": None}),
        ],
    )
    def test_null_rejected_for_required_columns(self, schema, body: dict) -> None:
        with pytest.raises(ValidationError) as exc_info:
            schema.model_validate(body)

        error = exc_info.value.errors()[0]
        assert error["loc"] == (next(iter(body)),)
        assert "cannot be null" in error["msg"]

    def test_null_clears_optional_columns(self) -> None:
        director = DirectorUpdate.model_validate({"birthDate": None, "nationality": None})
        producer = ProducerUpdate.model_validate({"foundedYear": None})
        media = MediaUpdate.model_validate({"poster": None, "seriesInfo": None})

        assert director.model_dump(exclude_unset=True) == {"birth_date": None, "nationality": None}
        assert producer.model_dump(exclude_unset=True) == {"founded_year": None}
        assert media.model_dump(exclude_unset=True) == {"poster": None, "series_info": None}

    def test_omitted_fields_stay_unset(self) -> None:
        update = GenreUpdate.model_validate({"tags": ["cult"]})
        assert update.model_dump(exclude_unset=True) == {"tags": ["cult"]}

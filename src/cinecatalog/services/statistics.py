"""
Read-only dashboard statistics for each catalog resource.

All rollups are computed in SQL except the director age figures, which need
today's date and are derived from the fetched birth dates.
"""

from collections.abc import Sequence
from datetime import date
from typing import Any

from sqlalchemy import Integer, case, cast, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.models.director import Director
from cinecatalog.models.genre import Genre
from cinecatalog.models.media import Media, media_genres
from cinecatalog.models.media_type import MediaType
from cinecatalog.models.producer import Producer

UNCLASSIFIED = "Unclassified"

# (label, upper bound); the last bucket has no upper bound
FOUNDED_YEAR_BUCKETS: list[tuple[str, int | None]] = [
    ("Before 1950", 1950),
    ("1950-1979", 1980),
    ("1980-1999", 2000),
    ("2000-2009", 2010),
    ("2010 onwards", None),
]
TYPE_DURATION_BUCKETS: list[tuple[str, int | None]] = [
    ("Short (< 30 min)", 30),
    ("Medium (30-60 min)", 60),
    ("Long (1-2 hours)", 120),
    ("Very long (> 2 hours)", None),
]
MEDIA_DURATION_BUCKETS: list[tuple[str, int | None]] = [
    ("Very short (< 30 min)", 30),
    ("Short (30-60 min)", 60),
    ("Medium (1-2 hours)", 120),
    ("Long (2-3 hours)", 180),
    ("Very long (> 3 hours)", None),
]


def bucket_case(column: Any, buckets: list[tuple[str, int | None]]) -> Any:
    """
    SQL CASE assigning each row to the first bucket whose bound it is below.

    The open-ended last bucket matches anything at or above the previous bound;
    NULLs fall through to ``UNCLASSIFIED``.
    """
    whens = []
    lower: int | None = None
    for label, upper in buckets:
        if upper is not None:
            whens.append((column < upper, label))
        elif lower is not None:
            whens.append((column >= lower, label))
        lower = upper
    return case(*whens, else_=UNCLASSIFIED)


def order_buckets(
    rows: Sequence[Any], buckets: list[tuple[str, int | None]], key: str
) -> list[dict[str, Any]]:
    """Emit bucket counts in declaration order, followed by the catch-all."""
    counts = {row[0]: row[1] for row in rows}
    labels = [label for label, _ in buckets] + [UNCLASSIFIED]
    return [{key: label, "count": counts[label]} for label in labels if label in counts]


async def bucket_counts(
    db: AsyncSession,
    column: Any,
    buckets: list[tuple[str, int | None]],
    key: str,
    *where: Any,
) -> list[dict[str, Any]]:
    """Row counts per bucket of ``column``, in bucket order."""
    # Bucketing in a subquery keeps the CASE parameters out of GROUP BY
    labelled = select(bucket_case(column, buckets).label("bucket")).where(*where).subquery()
    stmt = select(labelled.c.bucket, func.count()).group_by(labelled.c.bucket)
    rows = (await db.execute(stmt)).all()
    return order_buckets(rows, buckets, key)


async def status_counts(db: AsyncSession, model: Any) -> tuple[int, int, int]:
    """(total, active, inactive) from one grouped query."""
    rows = (await db.execute(select(model.is_active, func.count()).group_by(model.is_active))).all()
    by_flag = {flag: count for flag, count in rows}
    active = by_flag.get(True, 0)
    inactive = by_flag.get(False, 0)
    return active + inactive, active, inactive


async def top_values(
    db: AsyncSession,
    column: Any,
    key: str,
    *where: Any,
    limit: int | None = 10,
    unnest: bool = False,
) -> list[dict[str, Any]]:
    """Most frequent values of ``column`` as ``[{key: value, "count": n}]``."""
    if unnest:
        # One row per array element
        inner = select(func.unnest(column).label("value")).where(*where).subquery()
        value = inner.c.value
        stmt = select(value, func.count()).group_by(value)
    else:
        value = column
        stmt = select(value, func.count()).where(*where).group_by(value)
    stmt = stmt.order_by(func.count().desc(), value)
    if limit is not None:
        stmt = stmt.limit(limit)
    rows = (await db.execute(stmt)).all()
    return [{key: row[0], "count": row[1]} for row in rows]


async def top_referenced(
    db: AsyncSession,
    model: Any,
    fk_column: Any,
    extra_fields: tuple[str, ...] = (),
    *where: Any,
    count_key: str = "mediaCount",
    limit: int = 5,
) -> list[dict[str, Any]]:
    """
    Top entities by number of media pointing at them.

    Media are grouped by the foreign key first, then joined back to the
    referenced table for display fields.
    """
    counts = (
        select(fk_column.label("ref_id"), func.count().label("media_count"))
        .where(*where)
        .group_by(fk_column)
        .subquery()
    )
    columns = [model.id, model.name, *(getattr(model, f) for f in extra_fields)]
    stmt = (
        select(*columns, counts.c.media_count)
        .join(counts, counts.c.ref_id == model.id)
        .order_by(counts.c.media_count.desc(), model.name)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).all()
    results = []
    for row in rows:
        item = {"id": row[0], "name": row[1]}
        for offset, field in enumerate(extra_fields, start=2):
            item[_camel(field)] = row[offset]
        item[count_key] = row[-1]
        results.append(item)
    return results


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def age_on(birth_date: date, today: date) -> int:
    had_birthday = (today.month, today.day) >= (birth_date.month, birth_date.day)
    return today.year - birth_date.year - (0 if had_birthday else 1)


def age_summary(birth_dates: Sequence[date], today: date | None = None) -> dict[str, Any] | None:
    """Average, youngest and oldest age, or None when no birth date is known."""
    if not birth_dates:
        return None
    today = today or date.today()
    ages = [age_on(born, today) for born in birth_dates]
    return {
        "avgAge": round(sum(ages) / len(ages), 1),
        "minAge": min(ages),
        "maxAge": max(ages),
    }


# ---------------------------------------------------------------------------
# Per-resource statistics
# ---------------------------------------------------------------------------


async def genre_stats(db: AsyncSession) -> dict[str, Any]:
    total, active, inactive = await status_counts(db, Genre)
    popular = await top_referenced(db, Genre, media_genres.c.genre_id)
    return {
        "totalGenres": total,
        "activeGenres": active,
        "inactiveGenres": inactive,
        "popularGenres": popular,
    }


async def director_stats(db: AsyncSession) -> dict[str, Any]:
    total, active, inactive = await status_counts(db, Director)
    nationalities = await top_values(
        db,
        Director.nationality,
        "nationality",
        Director.is_active.is_(True),
        Director.nationality.is_not(None),
        Director.nationality != "",
    )
    prolific = await top_referenced(db, Director, Media.director_id, ("nationality",))
    birth_dates = (
        await db.execute(
            select(Director.birth_date).where(
                Director.is_active.is_(True), Director.birth_date.is_not(None)
            )
        )
    ).scalars().all()
    return {
        "totalDirectors": total,
        "activeDirectors": active,
        "inactiveDirectors": inactive,
        "nationalityStats": nationalities,
        "prolificDirectors": prolific,
        "ageStats": age_summary(list(birth_dates)),
    }


async def producer_stats(db: AsyncSession) -> dict[str, Any]:
    total, active, inactive = await status_counts(db, Producer)
    is_active = Producer.is_active.is_(True)
    countries = await top_values(db, Producer.country, "country", is_active)
    specialties = await top_values(
        db, Producer.specialties, "specialty", is_active, unnest=True
    )
    prolific = await top_referenced(db, Producer, Media.producer_id, ("country",))

    founded = await bucket_counts(
        db, Producer.founded_year, FOUNDED_YEAR_BUCKETS, "period", is_active
    )
    return {
        "totalProducers": total,
        "activeProducers": active,
        "inactiveProducers": inactive,
        "countryStats": countries,
        "specialtyStats": specialties,
        "prolificProducers": prolific,
        "foundedYearStats": founded,
    }


async def type_stats(db: AsyncSession) -> dict[str, Any]:
    total, active, inactive = await status_counts(db, MediaType)
    is_active = MediaType.is_active.is_(True)
    categories = await top_values(db, MediaType.category, "category", is_active, limit=None)
    formats = await top_values(db, MediaType.format, "format", is_active, limit=None)
    platforms = await top_values(db, MediaType.platforms, "platform", is_active, unnest=True)
    popular = await top_referenced(db, MediaType, Media.type_id, ("category",))

    min_duration = cast(MediaType.duration["min"].astext, Integer)
    durations = await bucket_counts(
        db, min_duration, TYPE_DURATION_BUCKETS, "durationRange", is_active
    )
    return {
        "totalTypes": total,
        "activeTypes": active,
        "inactiveTypes": inactive,
        "categoryStats": categories,
        "formatStats": formats,
        "platformStats": platforms,
        "popularTypes": popular,
        "durationStats": durations,
    }


async def media_stats(db: AsyncSession) -> dict[str, Any]:
    total, active, inactive = await status_counts(db, Media)
    is_active = Media.is_active.is_(True)

    type_counts = await _named_counts(db, MediaType, Media.type_id == MediaType.id, "type")
    genre_counts = await _genre_counts(db)

    year = cast(extract("year", Media.release_date), Integer)
    year_rows = (
        await db.execute(
            select(year, func.count())
            .where(is_active)
            .group_by(year)
            .order_by(year.desc())
            .limit(10)
        )
    ).all()

    top_directors = await top_referenced(
        db, Director, Media.director_id, ("nationality",), is_active, count_key="count"
    )
    top_producers = await top_referenced(
        db, Producer, Media.producer_id, ("country",), is_active, count_key="count"
    )

    rating_row = (
        await db.execute(
            select(
                func.avg(Media.average_rating),
                func.max(Media.average_rating),
                func.min(Media.average_rating),
                func.count(Media.average_rating),
            ).where(is_active, Media.average_rating.is_not(None))
        )
    ).one()
    rating_stats = None
    if rating_row[3]:
        rating_stats = {
            "averageRating": round(float(rating_row[0]), 2),
            "maxRating": rating_row[1],
            "minRating": rating_row[2],
            "totalRated": rating_row[3],
        }

    durations = await bucket_counts(
        db, Media.duration, MEDIA_DURATION_BUCKETS, "durationRange", is_active
    )

    return {
        "totalMedia": total,
        "activeMedia": active,
        "inactiveMedia": inactive,
        "typeStats": type_counts,
        "genreStats": genre_counts,
        "yearStats": [{"year": row[0], "count": row[1]} for row in year_rows],
        "topDirectors": top_directors,
        "topProducers": top_producers,
        "ratingStats": rating_stats,
        "durationStats": durations,
    }


async def _named_counts(
    db: AsyncSession, model: Any, join_on: Any, key: str, limit: int | None = None
) -> list[dict[str, Any]]:
    """Active media grouped by the name of a referenced entity."""
    stmt = (
        select(model.name, func.count())
        .select_from(Media)
        .join(model, join_on)
        .where(Media.is_active.is_(True))
        .group_by(model.name)
        .order_by(func.count().desc(), model.name)
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    rows = (await db.execute(stmt)).all()
    return [{key: row[0], "count": row[1]} for row in rows]


async def _genre_counts(db: AsyncSession) -> list[dict[str, Any]]:
    stmt = (
        select(Genre.name, func.count())
        .select_from(Media)
        .join(media_genres, media_genres.c.media_id == Media.id)
        .join(Genre, Genre.id == media_genres.c.genre_id)
        .where(Media.is_active.is_(True))
        .group_by(Genre.name)
        .order_by(func.count().desc(), Genre.name)
        .limit(10)
    )
    rows = (await db.execute(stmt)).all()
    return [{"genre": row[0], "count": row[1]} for row in rows]

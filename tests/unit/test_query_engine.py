"""Unit tests for the shared list machinery."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from cinecatalog.config import settings
from cinecatalog.models.genre import Genre
from cinecatalog.models.media import Media
from cinecatalog.schemas.common import ActiveFilter, SortOrder
from cinecatalog.services.media import MediaService
from cinecatalog.services.query_engine import (
    ListQuery,
    Page,
    active_clause,
    build_filters,
    ordered,
    paginate,
    search_clause,
    year_range,
)


def compile_sql(clause) -> str:
    return str(clause.compile(dialect=postgresql.dialect()))


def params(clause) -> dict:
    return clause.compile(dialect=postgresql.dialect()).params


class TestListQuery:
    def test_defaults(self) -> None:
        query = ListQuery()
        assert query.page == 1
        assert query.limit == settings.default_page_size
        assert query.active == ActiveFilter.TRUE
        assert query.order == SortOrder.ASC

    def test_limit_capped_at_maximum(self) -> None:
        assert ListQuery(limit=10_000).limit == settings.max_page_size

    def test_page_and_limit_at_least_one(self) -> None:
        query = ListQuery(page=0, limit=0)
        assert query.page == 1
        assert query.limit == 1

    def test_offset(self) -> None:
        assert ListQuery(page=3, limit=20).offset == 40

    def test_search_trimmed(self) -> None:
        assert ListQuery(search="  nolan ").search == "nolan"


class TestPage:
    def test_middle_page(self) -> None:
        pagination = Page(items=[], total=25, page=2, limit=10).pagination
        assert pagination.total_pages == 3
        assert pagination.has_next_page is True
        assert pagination.has_prev_page is True

    def test_last_page(self) -> None:
        pagination = Page(items=[], total=25, page=3, limit=10).pagination
        assert pagination.has_next_page is False

    def test_empty_result(self) -> None:
        pagination = Page(items=[], total=0, page=1, limit=10).pagination
        assert pagination.total_pages == 0
        assert pagination.has_next_page is False
        assert pagination.has_prev_page is False


class TestClauses:
    def test_active_all_applies_no_filter(self) -> None:
        assert active_clause(Genre, ActiveFilter.ALL) is None

    def test_active_false_selects_inactive(self) -> None:
        sql = compile_sql(active_clause(Genre, ActiveFilter.FALSE))
        assert sql == "genres.is_active IS false"

    def test_blank_search_applies_no_filter(self) -> None:
        assert search_clause("   ", [Genre.name]) is None

    def test_search_ors_columns_case_insensitively(self) -> None:
        clause = search_clause("drama", [Genre.name, Genre.description])
        sql = compile_sql(clause)
        assert sql.count("ILIKE") == 2
        assert " OR " in sql
        assert "ESCAPE" in sql

    def test_search_wildcards_matched_literally(self) -> None:
        clause = search_clause("100%", [Genre.name])
        assert list(params(clause).values()) == ["%100\\%%"]

    def test_year_range_is_half_open(self) -> None:
        clause = year_range(Media.release_date, 2010)
        sql = compile_sql(clause)
        assert "media.release_date >=" in sql
        assert "media.release_date <" in sql
        assert sorted(params(clause).values()) == [date(2010, 1, 1), date(2011, 1, 1)]

    def test_build_filters_drops_unused_clauses(self) -> None:
        query = ListQuery(active=ActiveFilter.ALL)
        assert build_filters(Genre, query, [Genre.name], [None]) == []

    def test_build_filters_ands_everything(self) -> None:
        query = ListQuery(search="x")
        filters = build_filters(Genre, query, [Genre.name], [Genre.name != "y", None])
        assert len(filters) == 3


class TestOrdering:
    def test_desc_puts_nulls_last_and_breaks_ties_by_id(self) -> None:
        stmt = ordered(select(Media), Media, Media.average_rating, SortOrder.DESC)
        sql = compile_sql(stmt)
        assert "ORDER BY media.average_rating DESC NULLS LAST, media.id DESC" in sql

    def test_asc(self) -> None:
        stmt = ordered(select(Genre), Genre, Genre.name, SortOrder.ASC)
        assert "ORDER BY genres.name ASC NULLS LAST, genres.id ASC" in compile_sql(stmt)


class TestMediaFilters:
    def test_genre_year_and_rating_filters_combine(self) -> None:
        service = MediaService(MagicMock())
        clauses = [
            c
            for c in service.resource_filters(genre="genre-1", year=1994, rating=8.0)
            if c is not None
        ]
        sql = " AND ".join(compile_sql(c) for c in clauses)

        assert len(clauses) == 3
        assert "EXISTS" in sql
        assert "media_genres" in sql
        assert "media.average_rating >=" in sql
        bound = [v for c in clauses for v in c.compile(dialect=postgresql.dialect()).params.values()]
        assert date(1994, 1, 1) in bound
        assert date(1995, 1, 1) in bound
        assert 8.0 in bound

    def test_cast_search_covers_actor_names_only(self) -> None:
        clause = search_clause("Reparto", MediaService(MagicMock()).search_columns())
        sql = compile_sql(clause)

        assert 'jsonb_path_query_array(media."cast"' in sql
        assert "'$[*].actor'" in sql
        assert "CAST(media.\"cast\" AS TEXT)" not in sql
        assert "character" not in sql
        assert "role" not in sql

    def test_unset_filters_are_skipped(self) -> None:
        service = MediaService(MagicMock())
        assert all(c is None for c in service.resource_filters())


async def test_paginate_runs_count_and_page_queries() -> None:
    genres = [Genre(id="g1", name="Drama"), Genre(id="g2", name="Comedia")]
    count_result = MagicMock()
    count_result.scalar_one.return_value = 12
    page_result = MagicMock()
    page_result.scalars.return_value.all.return_value = genres
    db = MagicMock()
    db.execute = AsyncMock(side_effect=[count_result, page_result])

    page = await paginate(db, Genre, ListQuery(page=2, limit=2), Genre.name, [])

    assert page.items == genres
    assert page.total == 12
    assert page.pagination.total_pages == 6
    page_stmt = db.execute.call_args_list[1].args[0]
    sql = compile_sql(page_stmt)
    assert "LIMIT" in sql
    assert "OFFSET" in sql

"""
Shared list machinery: filtering, searching, sorting and pagination.

Every catalog resource (and the admin user listing) is listed through
``paginate``. Resources only describe which columns are searched, which sort
keys exist and which extra predicates apply; the statement building lives here.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, Text, and_, cast, func, literal_column, or_, select
from sqlalchemy.dialects.postgresql import JSONPATH
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.config import settings
from cinecatalog.schemas.common import ActiveFilter, Pagination, SortOrder
from cinecatalog.utils.text import escape_like

ModelT = TypeVar("ModelT")


@dataclass
class ListQuery:
    """Generic list parameters shared by every resource."""

    page: int = 1
    limit: int = field(default_factory=lambda: settings.default_page_size)
    order: SortOrder = SortOrder.ASC
    active: ActiveFilter = ActiveFilter.TRUE
    search: str = ""

    def __post_init__(self) -> None:
        self.page = max(self.page, 1)
        # Oversized pages are capped rather than rejected
        self.limit = min(max(self.limit, 1), settings.max_page_size)
        self.search = self.search.strip()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class Page(Generic[ModelT]):
    """One page of results plus the total number of matching rows."""

    items: list[ModelT]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def pagination(self) -> Pagination:
        return Pagination(
            current_page=self.page,
            total_pages=self.total_pages,
            total_items=self.total,
            items_per_page=self.limit,
            has_next_page=self.page < self.total_pages,
            has_prev_page=self.page > 1,
        )


def active_clause(model: Any, active: ActiveFilter) -> ColumnElement[bool] | None:
    """Predicate on ``is_active``, or None when every row is wanted."""
    if active == ActiveFilter.ALL:
        return None
    return model.is_active.is_(active == ActiveFilter.TRUE)


def contains(column: Any, term: str) -> ColumnElement[bool]:
    """Case-insensitive substring match with LIKE wildcards in ``term`` escaped."""
    return column.ilike(f"%{escape_like(term)}%", escape="\\")


def search_clause(term: str, columns: list[Any]) -> ColumnElement[bool] | None:
    """
    OR-group matching ``term`` against any of ``columns``.

    Array columns should be passed already flattened to text (for example
    with ``func.array_to_string``). Returns None for a blank term.
    """
    term = term.strip()
    if not term or not columns:
        return None
    return or_(*(contains(column, term) for column in columns))


def array_text(column: Any) -> Any:
    """Flatten a string array column into one searchable string."""
    return func.array_to_string(column, " ")


def json_array_values(column: Any, key: str) -> Any:
    """
    Text of one key's values across a JSONB array of objects.

    Only the values are searchable; other keys and the key names themselves
    are left out. ``key`` must be a plain identifier.
    """
    path = cast(literal_column(f"'$[*].{key}'"), JSONPATH)
    return cast(func.jsonb_path_query_array(column, path), Text)


def year_range(column: Any, year: int) -> ColumnElement[bool]:
    """Half-open range covering exactly one calendar year."""
    return and_(column >= date(year, 1, 1), column < date(year + 1, 1, 1))


def build_filters(
    model: Any,
    query: ListQuery,
    search_columns: list[Any],
    extra: list[ColumnElement[bool] | None] | None = None,
) -> list[ColumnElement[bool]]:
    """Combine the active flag, search group and resource filters; all are ANDed."""
    clauses = [
        active_clause(model, query.active),
        search_clause(query.search, search_columns),
        *(extra or []),
    ]
    return [clause for clause in clauses if clause is not None]


def ordered(stmt: Select, model: Any, sort_column: Any, order: SortOrder) -> Select:
    """
    Order by the sort column, then by primary key.

    The id tie-breaker keeps pages stable when many rows share a sort value.
    """
    if order == SortOrder.DESC:
        return stmt.order_by(sort_column.desc().nulls_last(), model.id.desc())
    return stmt.order_by(sort_column.asc().nulls_last(), model.id.asc())


async def paginate(
    db: AsyncSession,
    model: Any,
    query: ListQuery,
    sort_column: Any,
    filters: list[ColumnElement[bool]],
    options: tuple[Any, ...] = (),
) -> Page[Any]:
    """Run the page query and a separate count query with the same filters."""
    stmt = select(model).where(*filters).options(*options)
    stmt = ordered(stmt, model, sort_column, query.order).offset(query.offset).limit(query.limit)
    count_stmt = select(func.count()).select_from(model).where(*filters)

    total = (await db.execute(count_stmt)).scalar_one()
    items = list((await db.execute(stmt)).scalars().all())

    return Page(items=items, total=total, page=query.page, limit=query.limit)

"""Genre API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.api.deps import get_actor, list_query, require_admin
from cinecatalog.database import get_db
from cinecatalog.models.user import User
from cinecatalog.schemas.common import ApiResponse
from cinecatalog.schemas.genre import (
    GenreCreate,
    GenreDetail,
    GenreList,
    GenreResponse,
    GenreUpdate,
)
from cinecatalog.services import statistics
from cinecatalog.services.genres import GenreService, GenreSort
from cinecatalog.services.query_engine import ListQuery

router = APIRouter()


@router.get("/genres", response_model=ApiResponse[GenreList])
async def list_genres(
    query: ListQuery = Depends(list_query),
    sort: GenreSort = Query(GenreSort.NAME),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GenreList]:
    """List genres with search, active filter, sorting and pagination."""
    page = await GenreService(db).list(query, sort)
    return ApiResponse(
        data=GenreList(genres=page.items, pagination=page.pagination),
        message=f"{len(page.items)} genres found",
    )


@router.get("/genres/active", response_model=ApiResponse[GenreList])
async def list_active_genres(db: AsyncSession = Depends(get_db)) -> ApiResponse[GenreList]:
    genres = await GenreService(db).list_active()
    return ApiResponse(data=GenreList(genres=genres), message=f"{len(genres)} active genres")


@router.get("/genres/stats", response_model=ApiResponse[dict[str, Any]])
async def genre_stats(db: AsyncSession = Depends(get_db)) -> ApiResponse[dict[str, Any]]:
    return ApiResponse(data=await statistics.genre_stats(db), message="Genre statistics")


@router.get("/genres/{genre_id}", response_model=ApiResponse[GenreDetail])
async def get_genre(genre_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[GenreDetail]:
    service = GenreService(db)
    genre = await service.get(genre_id)
    response = GenreResponse.model_validate(genre)
    response.media_count = await service.count_dependents(genre_id)
    return ApiResponse(data=GenreDetail(genre=response), message="Genre found")


@router.post("/genres", response_model=ApiResponse[GenreDetail], status_code=201)
async def create_genre(
    body: GenreCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GenreDetail]:
    genre = await GenreService(db).create(body, actor)
    return ApiResponse(
        data=GenreDetail(genre=GenreResponse.model_validate(genre)),
        message="Genre created",
    )


@router.put("/genres/{genre_id}", response_model=ApiResponse[GenreDetail])
async def update_genre(
    genre_id: str,
    body: GenreUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[GenreDetail]:
    genre = await GenreService(db).update(genre_id, body)
    return ApiResponse(
        data=GenreDetail(genre=GenreResponse.model_validate(genre)),
        message="Genre updated",
    )


@router.delete("/genres/{genre_id}", response_model=ApiResponse[GenreDetail])
async def delete_genre(genre_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[GenreDetail]:
    """Soft-delete a genre; refused while media still use it."""
    genre = await GenreService(db).deactivate(genre_id)
    return ApiResponse(
        data=GenreDetail(genre=GenreResponse.model_validate(genre)),
        message="Genre deactivated",
    )


@router.delete("/genres/{genre_id}/permanent", response_model=ApiResponse[None])
async def permanently_delete_genre(
    genre_id: str,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[None]:
    genre = await GenreService(db).permanent_delete(genre_id)
    return ApiResponse(message=f"Genre '{genre.name}' permanently deleted")

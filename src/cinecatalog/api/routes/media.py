"""Media API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.api.deps import get_actor, list_query
from cinecatalog.database import get_db
from cinecatalog.schemas.common import ApiResponse
from cinecatalog.schemas.media import (
    MediaCreate,
    MediaDetail,
    MediaList,
    MediaResponse,
    MediaUpdate,
)
from cinecatalog.services import statistics
from cinecatalog.services.media import MediaService, MediaSort
from cinecatalog.services.query_engine import ListQuery

router = APIRouter()


@router.get("/media", response_model=ApiResponse[MediaList])
async def list_media(
    query: ListQuery = Depends(list_query),
    sort: MediaSort = Query(MediaSort.TITLE),
    type: str | None = Query(None, description="Type id"),
    director: str | None = Query(None, description="Director id"),
    producer: str | None = Query(None, description="Producer id"),
    genre: str | None = Query(None, description="Genre id"),
    year: int | None = Query(None, ge=1800, le=3000, description="Release year"),
    rating: float | None = Query(None, ge=0, le=10, description="Minimum average rating"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[MediaList]:
    """
    List media.

    ``year`` matches release dates within that calendar year and ``rating``
    keeps entries whose average rating is at least the given value.
    """
    page = await MediaService(db).list(
        query,
        sort,
        type=type,
        director=director,
        producer=producer,
        genre=genre,
        year=year,
        rating=rating,
    )
    return ApiResponse(
        data=MediaList(media=page.items, pagination=page.pagination),
        message=f"{len(page.items)} media found",
    )


@router.get("/media/active", response_model=ApiResponse[MediaList])
async def list_active_media(db: AsyncSession = Depends(get_db)) -> ApiResponse[MediaList]:
    media = await MediaService(db).list_active()
    return ApiResponse(data=MediaList(media=media), message=f"{len(media)} active media")


@router.get("/media/stats", response_model=ApiResponse[dict[str, Any]])
async def media_stats(db: AsyncSession = Depends(get_db)) -> ApiResponse[dict[str, Any]]:
    return ApiResponse(data=await statistics.media_stats(db), message="Media statistics")


@router.get("/media/type/{type_id}", response_model=ApiResponse[MediaList])
async def list_media_by_type(
    type_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[MediaList]:
    media = await MediaService(db).list_active(type=type_id)
    return ApiResponse(data=MediaList(media=media), message=f"{len(media)} media of this type")


@router.get("/media/director/{director_id}", response_model=ApiResponse[MediaList])
async def list_media_by_director(
    director_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[MediaList]:
    media = await MediaService(db).list_active(director=director_id)
    return ApiResponse(
        data=MediaList(media=media), message=f"{len(media)} media by this director"
    )


@router.get("/media/genre/{genre_id}", response_model=ApiResponse[MediaList])
async def list_media_by_genre(
    genre_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[MediaList]:
    media = await MediaService(db).list_active(genre=genre_id)
    return ApiResponse(data=MediaList(media=media), message=f"{len(media)} media in this genre")


@router.get("/media/{media_id}", response_model=ApiResponse[MediaDetail])
async def get_media(media_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[MediaDetail]:
    media = await MediaService(db).get(media_id)
    return ApiResponse(
        data=MediaDetail(media=MediaResponse.model_validate(media)), message="Media found"
    )


@router.post("/media", response_model=ApiResponse[MediaDetail], status_code=201)
async def create_media(
    body: MediaCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[MediaDetail]:
    """Create a media entry; every referenced type, director, producer and genre must exist."""
    media = await MediaService(db).create(body, actor)
    return ApiResponse(
        data=MediaDetail(media=MediaResponse.model_validate(media)), message="Media created"
    )


@router.put("/media/{media_id}", response_model=ApiResponse[MediaDetail])
async def update_media(
    media_id: str,
    body: MediaUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[MediaDetail]:
    media = await MediaService(db).update(media_id, body)
    return ApiResponse(
        data=MediaDetail(media=MediaResponse.model_validate(media)), message="Media updated"
    )


@router.delete("/media/{media_id}", response_model=ApiResponse[MediaDetail])
async def delete_media(
    media_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[MediaDetail]:
    media = await MediaService(db).deactivate(media_id)
    return ApiResponse(
        data=MediaDetail(media=MediaResponse.model_validate(media)), message="Media deactivated"
    )

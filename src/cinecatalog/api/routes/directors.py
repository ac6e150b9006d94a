"""Director API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.api.deps import get_actor, list_query
from cinecatalog.database import get_db
from cinecatalog.schemas.common import ApiResponse
from cinecatalog.schemas.director import (
    DirectorCreate,
    DirectorDetail,
    DirectorList,
    DirectorResponse,
    DirectorUpdate,
)
from cinecatalog.services import statistics
from cinecatalog.services.directors import DirectorService, DirectorSort
from cinecatalog.services.query_engine import ListQuery

router = APIRouter()


@router.get("/directors", response_model=ApiResponse[DirectorList])
async def list_directors(
    query: ListQuery = Depends(list_query),
    sort: DirectorSort = Query(DirectorSort.NAME),
    nationality: str | None = Query(None, description="Substring of the nationality"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DirectorList]:
    page = await DirectorService(db).list(query, sort, nationality=nationality)
    return ApiResponse(
        data=DirectorList(directors=page.items, pagination=page.pagination),
        message=f"{len(page.items)} directors found",
    )


@router.get("/directors/active", response_model=ApiResponse[DirectorList])
async def list_active_directors(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DirectorList]:
    directors = await DirectorService(db).list_active()
    return ApiResponse(
        data=DirectorList(directors=directors), message=f"{len(directors)} active directors"
    )


@router.get("/directors/stats", response_model=ApiResponse[dict[str, Any]])
async def director_stats(db: AsyncSession = Depends(get_db)) -> ApiResponse[dict[str, Any]]:
    return ApiResponse(data=await statistics.director_stats(db), message="Director statistics")


@router.get("/directors/nationality/{nationality}", response_model=ApiResponse[DirectorList])
async def list_directors_by_nationality(
    nationality: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[DirectorList]:
    directors = await DirectorService(db).list_active(nationality=nationality)
    return ApiResponse(
        data=DirectorList(directors=directors),
        message=f"{len(directors)} directors with nationality '{nationality}'",
    )


@router.get("/directors/{director_id}", response_model=ApiResponse[DirectorDetail])
async def get_director(
    director_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[DirectorDetail]:
    service = DirectorService(db)
    director = await service.get(director_id)
    response = DirectorResponse.model_validate(director)
    response.media_count = await service.count_dependents(director_id)
    return ApiResponse(data=DirectorDetail(director=response), message="Director found")


@router.post("/directors", response_model=ApiResponse[DirectorDetail], status_code=201)
async def create_director(
    body: DirectorCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DirectorDetail]:
    director = await DirectorService(db).create(body, actor)
    return ApiResponse(
        data=DirectorDetail(director=DirectorResponse.model_validate(director)),
        message="Director created",
    )


@router.put("/directors/{director_id}", response_model=ApiResponse[DirectorDetail])
async def update_director(
    director_id: str,
    body: DirectorUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[DirectorDetail]:
    director = await DirectorService(db).update(director_id, body)
    return ApiResponse(
        data=DirectorDetail(director=DirectorResponse.model_validate(director)),
        message="Director updated",
    )


@router.delete("/directors/{director_id}", response_model=ApiResponse[DirectorDetail])
async def delete_director(
    director_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[DirectorDetail]:
    director = await DirectorService(db).deactivate(director_id)
    return ApiResponse(
        data=DirectorDetail(director=DirectorResponse.model_validate(director)),
        message="Director deactivated",
    )

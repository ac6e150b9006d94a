"""Media type API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.api.deps import get_actor, list_query
from cinecatalog.database import get_db
from cinecatalog.schemas.common import ApiResponse
from cinecatalog.schemas.media_type import (
    Category,
    TypeCreate,
    TypeDetail,
    TypeList,
    TypeResponse,
    TypeUpdate,
)
from cinecatalog.services import statistics
from cinecatalog.services.media_types import MediaTypeService, TypeSort
from cinecatalog.services.query_engine import ListQuery

router = APIRouter()


@router.get("/types", response_model=ApiResponse[TypeList])
async def list_types(
    query: ListQuery = Depends(list_query),
    sort: TypeSort = Query(TypeSort.NAME),
    category: Category | None = Query(None),
    platform: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[TypeList]:
    page = await MediaTypeService(db).list(query, sort, category=category, platform=platform)
    return ApiResponse(
        data=TypeList(types=page.items, pagination=page.pagination),
        message=f"{len(page.items)} types found",
    )


@router.get("/types/active", response_model=ApiResponse[TypeList])
async def list_active_types(db: AsyncSession = Depends(get_db)) -> ApiResponse[TypeList]:
    types = await MediaTypeService(db).list_active()
    return ApiResponse(data=TypeList(types=types), message=f"{len(types)} active types")


@router.get("/types/stats", response_model=ApiResponse[dict[str, Any]])
async def type_stats(db: AsyncSession = Depends(get_db)) -> ApiResponse[dict[str, Any]]:
    return ApiResponse(data=await statistics.type_stats(db), message="Type statistics")


@router.get("/types/category/{category}", response_model=ApiResponse[TypeList])
async def list_types_by_category(
    category: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[TypeList]:
    types = await MediaTypeService(db).list_active(category=category)
    return ApiResponse(
        data=TypeList(types=types), message=f"{len(types)} types in category '{category}'"
    )


@router.get("/types/platform/{platform}", response_model=ApiResponse[TypeList])
async def list_types_by_platform(
    platform: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[TypeList]:
    types = await MediaTypeService(db).list_active(platform=platform)
    return ApiResponse(
        data=TypeList(types=types), message=f"{len(types)} types available on '{platform}'"
    )


@router.get("/types/{type_id}", response_model=ApiResponse[TypeDetail])
async def get_type(type_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[TypeDetail]:
    service = MediaTypeService(db)
    media_type = await service.get(type_id)
    response = TypeResponse.model_validate(media_type)
    response.media_count = await service.count_dependents(type_id)
    return ApiResponse(data=TypeDetail(type=response), message="Type found")


@router.post("/types", response_model=ApiResponse[TypeDetail], status_code=201)
async def create_type(
    body: TypeCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[TypeDetail]:
    media_type = await MediaTypeService(db).create(body, actor)
    return ApiResponse(
        data=TypeDetail(type=TypeResponse.model_validate(media_type)),
        message="Type created",
    )


@router.put("/types/{type_id}", response_model=ApiResponse[TypeDetail])
async def update_type(
    type_id: str,
    body: TypeUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[TypeDetail]:
    media_type = await MediaTypeService(db).update(type_id, body)
    return ApiResponse(
        data=TypeDetail(type=TypeResponse.model_validate(media_type)),
        message="Type updated",
    )


@router.delete("/types/{type_id}", response_model=ApiResponse[TypeDetail])
async def delete_type(type_id: str, db: AsyncSession = Depends(get_db)) -> ApiResponse[TypeDetail]:
    media_type = await MediaTypeService(db).deactivate(type_id)
    return ApiResponse(
        data=TypeDetail(type=TypeResponse.model_validate(media_type)),
        message="Type deactivated",
    )

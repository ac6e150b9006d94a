"""Producer API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.api.deps import get_actor, list_query
from cinecatalog.database import get_db
from cinecatalog.schemas.common import ApiResponse
from cinecatalog.schemas.producer import (
    ProducerCreate,
    ProducerDetail,
    ProducerList,
    ProducerResponse,
    ProducerUpdate,
)
from cinecatalog.services import statistics
from cinecatalog.services.producers import ProducerService, ProducerSort
from cinecatalog.services.query_engine import ListQuery

router = APIRouter()


@router.get("/producers", response_model=ApiResponse[ProducerList])
async def list_producers(
    query: ListQuery = Depends(list_query),
    sort: ProducerSort = Query(ProducerSort.NAME),
    country: str | None = Query(None, description="Substring of the country"),
    specialty: str | None = Query(None, description="One of the producer specialties"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ProducerList]:
    page = await ProducerService(db).list(query, sort, country=country, specialty=specialty)
    return ApiResponse(
        data=ProducerList(producers=page.items, pagination=page.pagination),
        message=f"{len(page.items)} producers found",
    )


@router.get("/producers/active", response_model=ApiResponse[ProducerList])
async def list_active_producers(
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ProducerList]:
    producers = await ProducerService(db).list_active()
    return ApiResponse(
        data=ProducerList(producers=producers), message=f"{len(producers)} active producers"
    )


@router.get("/producers/stats", response_model=ApiResponse[dict[str, Any]])
async def producer_stats(db: AsyncSession = Depends(get_db)) -> ApiResponse[dict[str, Any]]:
    return ApiResponse(data=await statistics.producer_stats(db), message="Producer statistics")


@router.get("/producers/country/{country}", response_model=ApiResponse[ProducerList])
async def list_producers_by_country(
    country: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[ProducerList]:
    producers = await ProducerService(db).list_active(country=country)
    return ApiResponse(
        data=ProducerList(producers=producers),
        message=f"{len(producers)} producers from '{country}'",
    )


@router.get("/producers/specialty/{specialty}", response_model=ApiResponse[ProducerList])
async def list_producers_by_specialty(
    specialty: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[ProducerList]:
    producers = await ProducerService(db).list_active(specialty=specialty)
    return ApiResponse(
        data=ProducerList(producers=producers),
        message=f"{len(producers)} producers specialised in '{specialty}'",
    )


@router.get("/producers/{producer_id}", response_model=ApiResponse[ProducerDetail])
async def get_producer(
    producer_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[ProducerDetail]:
    service = ProducerService(db)
    producer = await service.get(producer_id)
    response = ProducerResponse.model_validate(producer)
    response.media_count = await service.count_dependents(producer_id)
    return ApiResponse(data=ProducerDetail(producer=response), message="Producer found")


@router.post("/producers", response_model=ApiResponse[ProducerDetail], status_code=201)
async def create_producer(
    body: ProducerCreate,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ProducerDetail]:
    producer = await ProducerService(db).create(body, actor)
    return ApiResponse(
        data=ProducerDetail(producer=ProducerResponse.model_validate(producer)),
        message="Producer created",
    )


@router.put("/producers/{producer_id}", response_model=ApiResponse[ProducerDetail])
async def update_producer(
    producer_id: str,
    body: ProducerUpdate,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[ProducerDetail]:
    producer = await ProducerService(db).update(producer_id, body)
    return ApiResponse(
        data=ProducerDetail(producer=ProducerResponse.model_validate(producer)),
        message="Producer updated",
    )


@router.delete("/producers/{producer_id}", response_model=ApiResponse[ProducerDetail])
async def delete_producer(
    producer_id: str, db: AsyncSession = Depends(get_db)
) -> ApiResponse[ProducerDetail]:
    producer = await ProducerService(db).deactivate(producer_id)
    return ApiResponse(
        data=ProducerDetail(producer=ProducerResponse.model_validate(producer)),
        message="Producer deactivated",
    )

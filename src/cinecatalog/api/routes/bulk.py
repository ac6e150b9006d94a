"""Bulk ingestion endpoints."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cinecatalog.actor import Actor
from cinecatalog.api.deps import get_actor
from cinecatalog.database import get_db
from cinecatalog.exceptions import ValidationError
from cinecatalog.schemas.bulk import (
    BulkAll,
    BulkDirectors,
    BulkGenres,
    BulkMedia,
    BulkProducers,
    BulkTypes,
)
from cinecatalog.schemas.common import ApiResponse
from cinecatalog.services.bulk import BulkIngestor

router = APIRouter()


async def _ingest(
    kind: str, items: list[dict[str, Any]], db: AsyncSession, actor: Actor
) -> ApiResponse[dict[str, Any]]:
    result = await BulkIngestor(db, actor).ingest(kind, items)
    return ApiResponse(
        data=result.as_dict(),
        message=f"{result.created} of {result.total} {kind} created",
    )


@router.post("/bulk/genres", response_model=ApiResponse[dict[str, Any]], status_code=201)
async def bulk_genres(
    body: BulkGenres,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict[str, Any]]:
    return await _ingest("genres", body.genres, db, actor)


@router.post("/bulk/directors", response_model=ApiResponse[dict[str, Any]], status_code=201)
async def bulk_directors(
    body: BulkDirectors,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict[str, Any]]:
    return await _ingest("directors", body.directors, db, actor)


@router.post("/bulk/producers", response_model=ApiResponse[dict[str, Any]], status_code=201)
async def bulk_producers(
    body: BulkProducers,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict[str, Any]]:
    return await _ingest("producers", body.producers, db, actor)


@router.post("/bulk/types", response_model=ApiResponse[dict[str, Any]], status_code=201)
async def bulk_types(
    body: BulkTypes,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict[str, Any]]:
    return await _ingest("types", body.types, db, actor)


@router.post("/bulk/media", response_model=ApiResponse[dict[str, Any]], status_code=201)
async def bulk_media(
    body: BulkMedia,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict[str, Any]]:
    return await _ingest("media", body.media, db, actor)


@router.post("/bulk/all", response_model=ApiResponse[dict[str, Any]], status_code=201)
async def bulk_all(
    body: BulkAll,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[dict[str, Any]]:
    """
    Create genres, directors, producers, types and media in one call.

    Items of the first four kinds may carry a ``ref`` key; media items can use
    those keys in ``type``, ``director``, ``producer`` and ``genres``.
    """
    bundle = body.model_dump()
    if not any(bundle.values()):
        raise ValidationError("At least one non-empty list is required")

    summary = await BulkIngestor(db, actor).ingest_all(bundle)
    return ApiResponse(
        data=summary,
        message=(
            f"Bulk operation completed: {summary['totalCreated']} of "
            f"{summary['totalRequested']} objects created"
        ),
    )

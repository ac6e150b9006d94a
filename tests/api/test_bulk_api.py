"""Tests for the bulk ingestion endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cinecatalog.actor import SYSTEM_ACTOR
from cinecatalog.services.bulk import KindResult


async def request(app: FastAPI, method: str, url: str, **kwargs: object):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.request(method, url, **kwargs)


async def test_bulk_genres_reports_partial_success(
    test_app: FastAPI, override_db: MagicMock
) -> None:
    result = KindResult(
        total=2,
        inserted_ids=["genre-1"],
        failed=[{"index": 1, "error": "A genre named 'Drama' already exists"}],
    )
    ingestor = MagicMock()
    ingestor.ingest = AsyncMock(return_value=result)

    with patch("cinecatalog.api.routes.bulk.BulkIngestor", return_value=ingestor) as cls:
        response = await request(
            test_app,
            "POST",
            "/api/v1/bulk/genres",
            json={"genres": [{"name": "Drama"}, {"name": "drama"}]},
        )

    assert response.status_code == 201
    body = response.json()
    assert body["data"] == {
        "created": 1,
        "total": 2,
        "insertedIds": ["genre-1"],
        "failed": [{"index": 1, "error": "A genre named 'Drama' already exists"}],
    }
    assert body["message"] == "1 of 2 genres created"
    assert cls.call_args.args[1] == SYSTEM_ACTOR


async def test_bulk_kind_requires_non_empty_list(
    test_app: FastAPI, override_db: MagicMock
) -> None:
    response = await request(test_app, "POST", "/api/v1/bulk/directors", json={"directors": []})

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["field"] == "directors"


async def test_bulk_all_rejects_empty_bundle(test_app: FastAPI, override_db: MagicMock) -> None:
    response = await request(test_app, "POST", "/api/v1/bulk/all", json={"genres": []})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "At least one non-empty list is required"


async def test_bulk_all_summarises_totals(test_app: FastAPI, override_db: MagicMock) -> None:
    summary = {
        "genres": {"created": 2, "total": 2, "insertedIds": ["g1", "g2"], "failed": []},
        "totalCreated": 2,
        "totalRequested": 2,
    }
    ingestor = MagicMock()
    ingestor.ingest_all = AsyncMock(return_value=summary)

    with patch("cinecatalog.api.routes.bulk.BulkIngestor", return_value=ingestor):
        response = await request(
            test_app,
            "POST",
            "/api/v1/bulk/all",
            json={"genres": [{"name": "Drama"}, {"name": "Comedia"}]},
        )

    assert response.status_code == 201
    assert response.json()["message"] == "Bulk operation completed: 2 of 2 objects created"
    bundle = ingestor.ingest_all.call_args.args[0]
    assert bundle["genres"] == [{"name": "Drama"}, {"name": "Comedia"}]
    assert bundle["media"] is None


async def test_bulk_items_that_are_not_objects_reach_the_ingestor(
    test_app: FastAPI, override_db: MagicMock
) -> None:
    result = KindResult(
        total=2,
        inserted_ids=["genre-1"],
        failed=[{"index": 1, "error": "Item must be an object"}],
    )
    ingestor = MagicMock()
    ingestor.ingest = AsyncMock(return_value=result)

    with patch("cinecatalog.api.routes.bulk.BulkIngestor", return_value=ingestor):
        response = await request(
            test_app, "POST", "/api/v1/bulk/genres", json={"genres": [{"name": "Drama"}, "Comedia"]}
        )

    assert response.status_code == 201
    assert ingestor.ingest.call_args.args == ("genres", [{"name": "Drama"}, "Comedia"])
    assert response.json()["data"]["failed"] == [{"index": 1, "error": "Item must be an object"}]

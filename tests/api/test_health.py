"""Tests for the health check and index endpoints."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient


async def test_health_returns_ok(test_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "timestamp" in body


async def test_index_lists_resource_endpoints(test_app: FastAPI) -> None:
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        response = await client.get("/")

    assert response.status_code == 200
    endpoints = response.json()["endpoints"]
    assert endpoints["genres"] == "/api/v1/genres"
    assert endpoints["media"] == "/api/v1/media"

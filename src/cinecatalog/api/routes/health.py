"""Health check and API index endpoints."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from cinecatalog.config import settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Status message with the current server time
    """
    return {
        "status": "ok",
        "message": "Catalog API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/", tags=["health"])
async def api_index() -> dict[str, Any]:
    """List the top-level resource endpoints."""
    prefix = settings.api_prefix
    return {
        "message": "Movie and series catalog API",
        "endpoints": {
            "health": "/health",
            "genres": f"{prefix}/genres",
            "directors": f"{prefix}/directors",
            "producers": f"{prefix}/producers",
            "types": f"{prefix}/types",
            "media": f"{prefix}/media",
            "bulk": f"{prefix}/bulk",
            "auth": f"{prefix}/auth",
        },
    }

"""Exception handlers producing the ``{success, error: {message, details}}`` envelope."""

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from cinecatalog.config import settings
from cinecatalog.exceptions import CatalogError, StoreError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"message": message, "details": details}},
    )


def validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into ``[{field, message}]``."""
    details = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix
        location = [str(part) for part in error.get("loc", ())[1:]]
        details.append({"field": ".".join(location), "message": error.get("msg", "")})
    return details


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.details)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(400, "Validation errors", validation_details(exc))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    error = StoreError("Database error", _debug_details(exc))
    return error_response(error.status_code, error.message, error.details)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, "Internal server error", _debug_details(exc))


def _debug_details(exc: Exception) -> Any:
    if settings.is_production:
        return None
    return {
        "type": type(exc).__name__,
        "error": str(exc),
        "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
    }


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

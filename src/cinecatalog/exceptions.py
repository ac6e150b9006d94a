"""Domain error taxonomy.

Every error raised deliberately by the service layer derives from
``CatalogError`` and carries the HTTP status the API layer should answer with.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(CatalogError):
    """Input violates a rule the request schema cannot express."""

    status_code = 400


class NotFoundError(CatalogError):
    status_code = 404

    def __init__(self, resource: str, entity_id: str) -> None:
        super().__init__(
            f"{resource.capitalize()} not found",
            f"No {resource} exists with ID: {entity_id}",
        )
        self.resource = resource
        self.entity_id = entity_id


class ConflictError(CatalogError):
    """Duplicate unique value, or an entity still referenced by others."""

    status_code = 400


class ReferentialError(CatalogError):
    """Media points at a Type, Director, Producer or Genre that does not exist."""

    status_code = 400


class AuthError(CatalogError):
    status_code = 401


class PermissionDeniedError(AuthError):
    status_code = 403


class StoreError(CatalogError):
    status_code = 500

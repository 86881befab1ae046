"""
Domain Errors
Raised by the services layer, rendered by a single handler in main.py

Usage:
    raise NotFound("Recipe", recipe_id)
    raise ValidationError("amount must be positive")
"""

from typing import Any, Dict, Optional
import logging

from fastapi import status
from sqlalchemy import exc as sa_exc
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class TraceabilityError(Exception):
    """Base error carrying the HTTP status the API layer responds with"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal error"

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(TraceabilityError):
    """Malformed or missing field (400)"""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request"


class NotFound(TraceabilityError):
    """
    Entity absent or owned by another organization (404)

    Both cases produce the same message so existence never leaks across tenants.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class AuthenticationFailure(TraceabilityError):
    """Bad credentials, or an unknown, expired or revoked token (401)"""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid credentials"

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class ConflictError(TraceabilityError):
    """Unique constraint violation (409)"""

    status_code = status.HTTP_409_CONFLICT
    detail = "Resource already exists"


class IntegrityError(TraceabilityError):
    """Missing or cross-tenant reference (422)"""

    status_code = 422
    detail = "Referenced record does not exist"


class StorageUnavailable(TraceabilityError):
    """Database connection or transaction failure (503)"""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Storage unavailable"


def translate_db_error(exc: SQLAlchemyError, conflict_detail: Optional[str] = None) -> TraceabilityError:
    """
    Map a storage-layer exception to a domain error

    Raw driver text is logged, never surfaced to the caller.
    """
    if isinstance(exc, sa_exc.IntegrityError):
        code = getattr(exc.orig, "pgcode", None)
        message = str(exc.orig).lower()
        if code == "23505" or "unique" in message:
            return ConflictError(conflict_detail)
        logger.warning(f"Integrity violation: {message}")
        return IntegrityError()

    logger.error(f"Storage failure: {exc}")
    return StorageUnavailable()

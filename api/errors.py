"""
Error translation for the HTTP layer.

Maps the domain error taxonomy to status codes:
- ValidationError   -> 400 (with field_errors)
- InvalidReference  -> 400
- NotFound          -> 404
- ReferenceInUse    -> 409
- PersistenceError  -> 503
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.models import ErrorResponse
from domain.errors import (
    InvalidReference,
    NotFound,
    PersistenceError,
    ReferenceInUse,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: str, **extra) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail, status_code=status_code, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, "Validation failed", str(exc), field_errors=exc.field_errors)


async def _invalid_reference(request: Request, exc: InvalidReference) -> JSONResponse:
    return _error_response(400, "Invalid reference", str(exc), field_errors={exc.field: str(exc)})


async def _not_found(request: Request, exc: NotFound) -> JSONResponse:
    return _error_response(404, "Not found", str(exc))


async def _reference_in_use(request: Request, exc: ReferenceInUse) -> JSONResponse:
    return _error_response(409, "Conflict", str(exc))


async def _persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error(
        "Store failure while handling request",
        extra={"method": request.method, "path": request.url.path, "operation": exc.operation, "error": str(exc)},
    )
    return _error_response(503, "Storage unavailable", "Failed to reach the data store. Please try again.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(InvalidReference, _invalid_reference)
    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(ReferenceInUse, _reference_in_use)
    app.add_exception_handler(PersistenceError, _persistence_error)

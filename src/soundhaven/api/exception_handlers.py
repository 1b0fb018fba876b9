"""Custom exception handlers for FastAPI application.

This module registers global exception handlers that convert domain exceptions and
validation errors into HTTP responses. Every error body carries a "message" field -
the catalog client reads exactly that key to show the user what went wrong.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from soundhaven.domain.exceptions import (
    AuthorizationError,
    ConfigurationError,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    ProvisionError,
    ValidationException,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"

# Status code for every domain exception we map explicitly. Checked in order, so keep
# subclasses above their parents.
_DOMAIN_STATUS: list[tuple[type[DomainException], int]] = [
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (DuplicateEntityException, status.HTTP_409_CONFLICT),
    (ValidationException, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def _error_body(message: str, **extra: Any) -> dict[str, Any]:
    return {"message": message, **extra}


def _sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Convert bytes in pydantic error dicts to strings so they can be JSON-encoded."""

    def _sanitize_value(value: Any) -> Any:
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        if isinstance(value, dict):
            return {k: _sanitize_value(v) for k, v in value.items()}
        if isinstance(value, list | tuple):
            return [_sanitize_value(item) for item in value]
        return value

    return [_sanitize_value(error) for error in errors]


# Hey future me, call this during app setup BEFORE the first request. The catch-all at the
# bottom is the "centralized handler": raw messages only leak in development.
def register_exception_handlers(app: FastAPI, expose_errors: bool = False) -> None:
    """Register handlers for domain, validation, HTTP and unexpected exceptions.

    Args:
        app: FastAPI application instance
        expose_errors: Return raw exception messages for unexpected errors
            (development); otherwise a generic message is returned
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request, exc: DomainException
    ) -> JSONResponse:
        if isinstance(exc, ProvisionError):
            logger.error(
                "Provisioning failed at %s: %s",
                request.url.path,
                exc.message,
                extra={"path": request.url.path, "external_id": exc.external_id},
            )
            message = exc.message if expose_errors else GENERIC_ERROR_MESSAGE
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=_error_body(message),
            )

        for exc_type, status_code in _DOMAIN_STATUS:
            if isinstance(exc, exc_type):
                break
        else:
            status_code = status.HTTP_400_BAD_REQUEST

        log = logger.info if status_code == status.HTTP_404_NOT_FOUND else logger.warning
        log(
            "%s at %s: %s",
            type(exc).__name__,
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return JSONResponse(status_code=status_code, content=_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = _sanitize_validation_errors(list(exc.errors()))
        logger.warning(
            "Request validation error at %s: %s",
            request.url.path,
            errors,
            extra={"path": request.url.path, "errors": errors},
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body("Invalid request", detail=errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "HTTP error %d at %s: %s",
            exc.status_code,
            request.url.path,
            exc.detail,
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error at %s: %s",
            request.url.path,
            exc,
            exc_info=exc,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
        message = str(exc) if expose_errors else GENERIC_ERROR_MESSAGE
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(message),
        )

"""
Exception handlers for FastAPI application.

Every error body has the shape {"error": true, "message": ..., "status_code": ...};
domain errors add "code" and "details".
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from commerce_hub.core.domain.exceptions import (
    CapabilityRequiredException,
    DomainException,
    EntityNotFoundException,
    InsufficientInputException,
    TenantInactiveException,
    ValidationException,
)

logger = logging.getLogger(__name__)

UNPROCESSABLE_CONTENT = 422

# Most specific first
DOMAIN_STATUS_CODES: tuple[tuple[type[DomainException], int], ...] = (
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (TenantInactiveException, status.HTTP_403_FORBIDDEN),
    (InsufficientInputException, status.HTTP_400_BAD_REQUEST),
    (ValidationException, status.HTTP_400_BAD_REQUEST),
    (CapabilityRequiredException, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def status_for(exc: DomainException) -> int:
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate domain exceptions to HTTP responses."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    status_code = status_for(exc)
    log_level = logging.ERROR if status_code >= 500 else logging.INFO
    logger.log(log_level, f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "message": exc.message,
            "status_code": status_code,
            "code": exc.code,
            "details": exc.details,
        },
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return JSONResponse(
        status_code=http_exc.status_code,
        content={
            "error": True,
            "message": http_exc.detail,
            "status_code": http_exc.status_code,
        },
        headers=http_exc.headers,
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors with per-field details."""
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(
            status_code=UNPROCESSABLE_CONTENT,
            content={"error": True, "message": str(exc), "status_code": UNPROCESSABLE_CONTENT},
        )

    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=UNPROCESSABLE_CONTENT,
        content={
            "error": True,
            "message": "Validation error",
            "details": errors,
            "status_code": UNPROCESSABLE_CONTENT,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=exc,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": "Internal server error",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")

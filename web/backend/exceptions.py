#!/usr/bin/env python3
"""
Error handlers for the web application.

Service exceptions come from core.exceptions; this module maps them onto
HTTP status codes with a consistent error body.
"""

import logging
from typing import Any, Dict, Optional
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import (
    ServiceException,
    ValidationError,
    PermissionDeniedError,
    NotFoundError,
    ConflictError,
    DependencyError,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses resolve through their base
STATUS_CODES = (
    (ValidationError, 400),
    (PermissionDeniedError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (DependencyError, 503),
)


def status_code_for(exc: ServiceException) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def error_content(error: Any, error_type: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    content = {
        "success": False,
        "error": error,
        "type": error_type
    }
    if details:
        content["details"] = details
    return content


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content=error_content(str(exc), exc.__class__.__name__, exc.details)
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.

    Args:
        request: The FastAPI request.
        exc: The HTTP exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(exc.detail, "HTTPException")
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies and parameters are client errors (400)."""
    return JSONResponse(
        status_code=400,
        content=error_content(
            "Invalid request", "ValidationError", {"errors": jsonable_errors(exc)}
        )
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content=error_content("Internal server error", "InternalError")
    )

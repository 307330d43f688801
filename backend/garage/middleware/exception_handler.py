"""Exception handlers mapping failures onto the JSON error contract.

Every error body has the same shape: ``{"error", "message", "details"}``.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import ErrorCode, GarageException

logger = logging.getLogger(__name__)


async def garage_exception_handler(request: Request, exc: GarageException) -> JSONResponse:
    """Log a domain exception and render it with its own status code."""
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"GarageException: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def _describe(exc: RequestValidationError) -> str:
    """One-line summary of the first validation problem."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"Invalid request: {location}: {message}" if location else f"Invalid request: {message}"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies, ids and query strings are 400s, not FastAPI's 422."""
    message = _describe(exc)
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "reason": message},
    )
    return JSONResponse(
        status_code=400,
        content={"error": ErrorCode.VALIDATION_ERROR.value, "message": message, "details": {}},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with traceback, answer with a generic 500."""
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": ErrorCode.INTERNAL_ERROR.value,
            "message": "Internal server error",
            "details": {},
        },
    )

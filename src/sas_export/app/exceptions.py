"""
Application Exceptions
======================

Maps internal exceptions to HTTP status codes.
"""

import logging

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTION MAPPING
# =============================================================================

# Maps exception class names to (status_code, user_message)
EXCEPTION_MAP = {
    # Configuration
    "ConfigurationError": (400, "The export configuration is invalid."),
    "MissingDialectError": (400, "No database dialect was given."),
    "UnsupportedDialectError": (400, "The database dialect is not supported."),

    # Source data
    "CatalogIOError": (422, "The source tables could not be read."),
    "ValueError": (422, "The source data does not match its column catalog."),

    # Output
    "ExportIOError": (500, "Failed to write export output."),
    "SchemaStateError": (500, "Schema statements were emitted out of order."),
    "ExportValidationError": (500, "Exported files failed validation."),
}


def _lookup(exc: Exception) -> tuple[int, str]:
    exc_name = type(exc).__name__
    if exc_name in EXCEPTION_MAP:
        return EXCEPTION_MAP[exc_name]
    return 500, "Internal system error."


def get_http_exception(exc: Exception) -> HTTPException:
    """
    Convert an internal exception to an HTTPException.

    Args:
        exc: The caught exception.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    status_code, user_message = _lookup(exc)
    if status_code >= 500:
        logger.error("Export failed: %s", exc, exc_info=exc)
    else:
        logger.warning("Export rejected: %s", exc)

    return HTTPException(
        status_code=status_code,
        detail={
            "status": "error",
            "message": user_message,
            "detail": str(exc)
        }
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns structured error response.
    """
    status_code, user_message = _lookup(exc)
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)

    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "message": user_message,
            "detail": str(exc)
        }
    )

"""Exception handler middleware for structured error responses."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from ..exceptions import CatalogException

logger = logging.getLogger(__name__)


async def catalog_exception_handler(request: Request, exc: CatalogException) -> JSONResponse:
    """
    Handle catalog exceptions and return structured JSON responses.

    Not-found lookups are logged at INFO; everything else at ERROR.

    Args:
        request: FastAPI request object
        exc: CatalogException instance

    Returns:
        JSONResponse with error details
    """
    log = logger.info if exc.status_code == 404 else logger.error
    log(
        f"CatalogException: {exc.error_code.value}",
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

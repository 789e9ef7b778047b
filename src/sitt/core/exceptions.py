"""Exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.sitt.core.logging import get_logger
from src.sitt.services.errors import (
    ConcurrentUpdateError,
    DomainConflictError,
    NotFoundError,
    ProjectNameConflictError,
    TrackingError,
)

logger = get_logger(__name__)

INTERNAL_ERROR_DETAIL = "An internal error occurred"


def tracking_error_status(exc: TrackingError) -> int:
    """HTTP status for a service error. Anything not user-actionable is a 500."""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ProjectNameConflictError | ConcurrentUpdateError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, DomainConflictError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(TrackingError)
    async def tracking_exception_handler(request: Request, exc: TrackingError) -> JSONResponse:
        request_id = correlation_id.get()
        status_code = tracking_error_status(exc)
        if status_code >= 500:
            logger.error(
                "Tracking operation failed",
                error_type=type(exc).__name__,
                error=exc.message,
                request_id=request_id,
                path=request.url.path,
            )
            detail = INTERNAL_ERROR_DETAIL
        else:
            detail = exc.message
        return JSONResponse(
            status_code=status_code,
            content={
                "detail": detail,
                "request_id": request_id,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )

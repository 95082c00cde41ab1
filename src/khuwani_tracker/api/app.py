"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from khuwani_tracker.api.organizer import router as organizer_router
from khuwani_tracker.api.public import router as public_router
from khuwani_tracker.app_logging import configure_logging
from khuwani_tracker.containers import AppContainer
from khuwani_tracker.domain.errors import (
    DuplicateAccountError,
    KhuwaniError,
    NotFoundError,
    SlotTakenError,
    UnauthorizedError,
    ValidationFailure,
)

_STATUS_BY_ERROR: tuple[tuple[type[KhuwaniError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ValidationFailure, status.HTTP_400_BAD_REQUEST),
    (DuplicateAccountError, status.HTTP_400_BAD_REQUEST),
    (SlotTakenError, status.HTTP_409_CONFLICT),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(organizer_router)
    app.include_router(public_router)

    @app.exception_handler(KhuwaniError)
    async def khuwani_error_handler(
        request: Request, exc: KhuwaniError
    ) -> JSONResponse:
        status_code = status_for_error(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "error_code": exc.error_code},
            )
        return JSONResponse(
            status_code=status_code,
            content={"success": False, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": _first_error_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Something went wrong"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def status_for_error(exc: KhuwaniError) -> int:
    """Map a failure kind to its HTTP status code."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "Invalid request"))
    return f"{location}: {message}" if location else message

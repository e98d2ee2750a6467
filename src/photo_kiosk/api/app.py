"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from photo_kiosk.api.realtime import router as realtime_router
from photo_kiosk.api.sessions import router as sessions_router
from photo_kiosk.app_logging import configure_logging
from photo_kiosk.config import parse_cors_origins
from photo_kiosk.containers import AppContainer
from photo_kiosk.domain.errors import (
    InvalidTransitionError,
    KioskError,
    NoImageToPrintError,
    PrintFailedError,
    SessionNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        state_container.image_storage.ensure_directory()
        logger.info("Server is running on %s", state_container.settings.base_url)
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    app.include_router(sessions_router)
    app.include_router(realtime_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Landing endpoint."""
        return {"message": "Welcome to the Kiosk App API"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(tz=UTC).isoformat()}

    return app


def _register_error_handlers(app: FastAPI) -> None:
    """Render domain and HTTP errors as ``{"error": ...}`` bodies."""
    logger = logging.getLogger(__name__)

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "Session not found")

    @app.exception_handler(NoImageToPrintError)
    async def no_image(request: Request, exc: NoImageToPrintError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, "No image to print")

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition(
        request: Request, exc: InvalidTransitionError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(PrintFailedError)
    async def print_failed(request: Request, exc: PrintFailedError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to print image")

    @app.exception_handler(KioskError)
    async def kiosk_error(request: Request, exc: KioskError) -> JSONResponse:
        logger.error("Unhandled kiosk error: %s", exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

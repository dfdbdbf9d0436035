"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fasting_tracker.api.fasting import router as fasting_router
from fasting_tracker.api.streaks import router as streaks_router
from fasting_tracker.app_logging import configure_logging
from fasting_tracker.containers import AppContainer
from fasting_tracker.domain.errors import (
    InvalidConfigurationError,
    InvalidTransitionError,
    SessionAlreadyOpenError,
    SessionNotFoundError,
)

_ERROR_STATUS: dict[type[Exception], int] = {
    SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    SessionAlreadyOpenError: status.HTTP_409_CONFLICT,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    InvalidConfigurationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.streak_service.ensure_streaks()
        except Exception:
            logger.exception("Failed to seed streaks")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(fasting_router)
    app.include_router(streaks_router)

    for error_type, status_code in _ERROR_STATUS.items():
        app.add_exception_handler(error_type, _error_handler(status_code, logger))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_handler(
    status_code: int, logger: logging.Logger
) -> Callable[[Request, Exception], Awaitable[JSONResponse]]:
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        logger.info(
            "Request rejected: path=%s status=%s error=%s",
            request.url.path,
            status_code,
            exc,
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handle

"""FastAPI application entry point."""

import asyncio
import contextlib
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from blueprint_agent.api import router as api_router
from blueprint_agent.api.dependencies import get_session_store
from blueprint_agent.api.errors import register_exception_handlers
from blueprint_agent.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from blueprint_agent.core.config import get_settings
from blueprint_agent.core.logging import get_logger

logger = get_logger(__name__)


async def _sweep_sessions_forever(interval_seconds: int) -> None:
    store = get_session_store()
    while True:
        await asyncio.sleep(interval_seconds)
        store.sweep_expired()


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    sweeper = None
    if settings.SESSION_TTL_SECONDS > 0 and settings.SESSION_SWEEP_INTERVAL_SECONDS > 0:
        sweeper = asyncio.create_task(
            _sweep_sessions_forever(settings.SESSION_SWEEP_INTERVAL_SECONDS)
        )
    logger.info(f"Blueprint agent ready, env={settings.BLUEPRINT_ENV}")
    try:
        yield
    finally:
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Blueprint Agent",
        description="Conversational website blueprint generation with PDF delivery",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    # CORS must be added last so it wraps the other middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "ok"}, status_code=200)

    app.include_router(api_router)

    if settings.STATIC_DIR:
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()

"""FastAPI application factory and entrypoint."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from soundhaven import __version__
from soundhaven.api import api_router
from soundhaven.api.exception_handlers import register_exception_handlers
from soundhaven.api.routers import health
from soundhaven.config import Settings, get_settings
from soundhaven.infrastructure.lifecycle import lifespan
from soundhaven.infrastructure.observability import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use; defaults to get_settings()
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="SoundHaven",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app, expose_errors=not settings.is_production)

    app.include_router(health.router, tags=["Health"])
    app.include_router(api_router, prefix="/api")

    return app


def run() -> None:
    """Console entrypoint: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()

"""Application lifecycle management for startup and shutdown tasks.

This module holds the FastAPI lifespan context manager:
- logging configuration
- storage directories and SQLite path validation
- database initialization (and schema creation when enabled)
- the temp-file cleanup worker
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI

from soundhaven.application.workers import TempFileCleanupWorker
from soundhaven.config import Settings
from soundhaven.domain.exceptions import ConfigurationError
from soundhaven.infrastructure.observability import configure_logging
from soundhaven.infrastructure.persistence import Database

logger = logging.getLogger(__name__)


# Hey future me, SQLite needs a writable parent directory for the .db file AND its
# journal files. We check that before building the engine so a bad DATABASE_URL fails at
# startup with a readable message instead of a cryptic OperationalError on first request.
def _validate_sqlite_path(settings: Settings) -> None:
    """Validate SQLite database directory before engine creation."""
    db_path = settings._get_sqlite_db_path()
    if db_path is None:
        return

    parent = db_path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
        probe = parent / f".{db_path.stem}_write_test"
        probe.write_bytes(b"test")
        probe.unlink()
    except OSError as exc:
        raise ConfigurationError(
            f"Database directory '{parent}' is not writable: {exc}. "
            "Update SOUNDHAVEN_DATABASE__URL or adjust directory permissions."
        ) from exc


# Listen future me, everything before `yield` runs at STARTUP, everything after at SHUTDOWN.
# The finally block runs even if startup blew up halfway, so every resource is guarded by
# "was it created?" checks.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info("Starting application: %s (%s)", settings.app_name, settings.environment)

    db: Database | None = None
    cleanup_worker: TempFileCleanupWorker | None = None
    cleanup_task: asyncio.Task[None] | None = None
    try:
        settings.ensure_directories()
        _validate_sqlite_path(settings)

        db = Database(settings)
        app.state.db = db
        logger.info("Database initialized: %s", settings.database.url)

        if settings.database.auto_create_tables:
            await db.create_tables()
            logger.info("Database tables created")

        cleanup_worker = TempFileCleanupWorker(
            temp_dir=settings.storage.temp_dir,
            interval_seconds=settings.storage.temp_cleanup_interval_seconds,
        )
        cleanup_task = asyncio.create_task(
            cleanup_worker.start(), name="temp_cleanup_worker"
        )
        app.state.temp_cleanup_worker = cleanup_worker

        yield
    finally:
        logger.info("Shutting down application")

        if cleanup_worker is not None:
            cleanup_worker.stop()
        if cleanup_task is not None:
            cleanup_task.cancel()
            with suppress(asyncio.CancelledError):
                await cleanup_task

        if db is not None:
            await db.close()
            logger.info("Database connections closed")

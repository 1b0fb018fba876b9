"""Shared fixtures.

Hey future me - every test gets its own SQLite file under tmp_path, so tests never see
each other's rows and can run in any order. File-backed (not :memory:) on purpose: the
concurrency tests need several connections looking at the same database.
"""

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from soundhaven.config import ApiSettings, DatabaseSettings, Settings, StorageSettings
from soundhaven.infrastructure.persistence import Database
from soundhaven.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        environment="development",
        database=DatabaseSettings(
            url=f"sqlite+aiosqlite:///{tmp_path}/test.db",
            auto_create_tables=True,
        ),
        api=ApiSettings(admin_ids=[]),
        storage=StorageSettings(
            temp_dir=tmp_path / "tmp",
            temp_cleanup_interval_seconds=86400,
        ),
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    db = Database(settings)
    await db.create_tables()
    try:
        yield db
    finally:
        await db.close()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    # Context manager runs the lifespan: tables get created, app.state.db is set.
    with TestClient(app) as test_client:
        yield test_client

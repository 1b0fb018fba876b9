"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from soundhaven.client import RemoteClient
from soundhaven.config import Settings


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # A developer's .env in the repo root must not leak into these tests.
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = Settings()

    assert settings.environment == "development"
    assert settings.is_production is False
    assert settings.api.admin_ids == []
    assert settings.storage.temp_cleanup_interval_seconds == 3600


def test_nested_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOUNDHAVEN_ENVIRONMENT", "production")
    monkeypatch.setenv("SOUNDHAVEN_LOG_LEVEL", "debug")
    monkeypatch.setenv("SOUNDHAVEN_API__ADMIN_IDS", '["admin-1"]')
    monkeypatch.setenv("SOUNDHAVEN_CLIENT__BASE_URL", "https://music.example/api/")

    settings = Settings()

    assert settings.is_production is True
    assert settings.log_level == "DEBUG"
    assert settings.api.admin_ids == ["admin-1"]
    assert settings.client.base_url == "https://music.example/api/"


def test_invalid_log_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOUNDHAVEN_LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite+aiosqlite:///./data/app.db", Path("./data/app.db")),
        ("sqlite+aiosqlite:///:memory:", None),
        ("postgresql+asyncpg://u:p@db/app", None),
    ],
)
def test_sqlite_db_path(url: str, expected: Path | None) -> None:
    settings = Settings()
    settings.database.url = url

    assert settings._get_sqlite_db_path() == expected


def test_remote_client_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOUNDHAVEN_CLIENT__BASE_URL", "https://music.example/api/")
    monkeypatch.setenv("SOUNDHAVEN_CLIENT__TOKEN", "secret")

    remote = RemoteClient.from_settings(Settings().client)

    assert remote.base_url == "https://music.example/api"
    assert remote._headers()["Authorization"] == "Bearer secret"

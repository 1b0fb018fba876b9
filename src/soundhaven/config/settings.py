"""Application settings loaded from environment variables and .env files."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Hey future me, every group below is a plain BaseModel nested in Settings. With
# env_nested_delimiter="__" you override a nested field like
# SOUNDHAVEN_DATABASE__URL=postgresql+asyncpg://... or SOUNDHAVEN_API__PORT=8080.
# Don't make the groups BaseSettings themselves - they'd read env vars twice!
class DatabaseSettings(BaseModel):
    """Database connection settings."""

    url: str = Field(
        default="sqlite+aiosqlite:///./soundhaven.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(default=False, description="Log all SQL statements")
    pool_pre_ping: bool = Field(default=True)
    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    pool_recycle: int = Field(default=3600, ge=-1)
    # Tests and local dev create the schema directly; production runs alembic.
    auto_create_tables: bool = Field(default=False)


class ApiSettings(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=9000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    # External ids allowed to use /api/admin. Empty list disables the guard.
    admin_ids: list[str] = Field(default_factory=list)


class StorageSettings(BaseModel):
    """Filesystem locations."""

    temp_dir: Path = Field(default=Path("./tmp"))
    temp_cleanup_interval_seconds: int = Field(default=3600, ge=1)


class ObservabilitySettings(BaseModel):
    """Logging settings."""

    log_json_format: bool = Field(default=False)


class ClientSettings(BaseModel):
    """Settings for the remote catalog client."""

    base_url: str = Field(default="http://localhost:9000/api")
    timeout: float = Field(default=30.0, gt=0)
    token: str | None = Field(default=None, description="Bearer token sent with requests")


class Settings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_prefix="SOUNDHAVEN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="soundhaven")
    environment: Literal["development", "production"] = Field(default="development")
    log_level: str = Field(default="INFO")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    client: ClientSettings = Field(default_factory=ClientSettings)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return level

    @property
    def is_production(self) -> bool:
        """True when running with production error reporting."""
        return self.environment == "production"

    def _get_sqlite_db_path(self) -> Path | None:
        """Return the SQLite database file path, or None for other backends."""
        url = self.database.url
        if not url.startswith("sqlite"):
            return None
        _, _, path = url.partition(":///")
        if not path or path == ":memory:":
            return None
        return Path(path)

    def ensure_directories(self) -> None:
        """Create storage directories if missing."""
        self.storage.temp_dir.mkdir(parents=True, exist_ok=True)


# Yo, lru_cache makes this a process-wide singleton. Tests that need other values
# call get_settings.cache_clear() or pass a Settings object straight into create_app().
@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()

"""Persistence layer: database engine, ORM models and repositories."""

from soundhaven.infrastructure.persistence.database import Database
from soundhaven.infrastructure.persistence.repositories import (
    AlbumRepository,
    StatsRepository,
    TrackRepository,
    UserRepository,
)

__all__ = [
    "AlbumRepository",
    "Database",
    "StatsRepository",
    "TrackRepository",
    "UserRepository",
]

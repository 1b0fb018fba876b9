"""Repository implementations for domain entities."""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select, union, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from soundhaven.domain.entities import Album, CatalogStats, Track, User
from soundhaven.domain.exceptions import (
    DuplicateEntityException,
    EntityNotFoundException,
)
from soundhaven.domain.ports import (
    IAlbumRepository,
    IStatsRepository,
    ITrackRepository,
    IUserRepository,
)

from .models import AlbumModel, TrackModel, UserModel, ensure_utc_aware

logger = logging.getLogger(__name__)


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a unique-key conflict apart from other integrity failures.

    SQLite says "UNIQUE constraint failed: users.external_id", PostgreSQL says
    "duplicate key value violates unique constraint ...".
    """
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of User repository."""

    # Hey future me, repos get their session injected and never commit - the caller's
    # session_scope owns the transaction. add() is the exception that FLUSHES: the unique
    # constraint only fires when the INSERT actually hits the DB, and the provisioner needs
    # to see that conflict as a DuplicateEntityException right here, not as a raw
    # IntegrityError at commit time.
    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    def _model_to_entity(self, model: UserModel) -> User:
        return User(
            id=model.id,
            external_id=model.external_id,
            display_name=model.display_name,
            avatar_url=model.avatar_url,
            created_at=ensure_utc_aware(model.created_at),
            updated_at=ensure_utc_aware(model.updated_at),
        )

    async def add(self, user: User) -> None:
        """Add a new user and flush so uniqueness is checked immediately."""
        model = UserModel(
            id=user.id,
            external_id=user.external_id,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateEntityException("User", user.external_id) from e
            raise

    async def get_by_external_id(self, external_id: str) -> User | None:
        """Get a user by external identity."""
        stmt = select(UserModel).where(UserModel.external_id == external_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def list_all(self, exclude_external_id: str | None = None) -> list[User]:
        """List users, oldest first, optionally leaving out one identity."""
        stmt = select(UserModel).order_by(UserModel.created_at)
        if exclude_external_id:
            stmt = stmt.where(UserModel.external_id != exclude_external_id)
        result = await self.session.execute(stmt)
        return [self._model_to_entity(m) for m in result.scalars().all()]

    async def count(self) -> int:
        """Count users."""
        result = await self.session.execute(select(func.count(UserModel.id)))
        return result.scalar() or 0


def _track_to_entity(model: TrackModel) -> Track:
    return Track(
        id=model.id,
        title=model.title,
        artist=model.artist,
        album_id=model.album_id,
        duration_seconds=model.duration_seconds,
        audio_url=model.audio_url,
        image_url=model.image_url,
        created_at=ensure_utc_aware(model.created_at),
        updated_at=ensure_utc_aware(model.updated_at),
    )


class TrackRepository(ITrackRepository):
    """SQLAlchemy implementation of Track repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def add(self, track: Track) -> None:
        """Add a new track, appending it to its album's ordering."""
        position = None
        if track.album_id is not None:
            album = await self.session.get(AlbumModel, track.album_id)
            if album is None:
                raise EntityNotFoundException("Album", track.album_id)
            result = await self.session.execute(
                select(func.max(TrackModel.position)).where(
                    TrackModel.album_id == track.album_id
                )
            )
            last = result.scalar()
            position = 0 if last is None else last + 1

        model = TrackModel(
            id=track.id,
            title=track.title,
            artist=track.artist,
            album_id=track.album_id,
            position=position,
            duration_seconds=track.duration_seconds,
            audio_url=track.audio_url,
            image_url=track.image_url,
        )
        if track.created_at is not None:
            model.created_at = track.created_at
        if track.updated_at is not None:
            model.updated_at = track.updated_at
        self.session.add(model)
        await self.session.flush()

    async def get_by_id(self, track_id: str) -> Track | None:
        """Get a track by ID."""
        model = await self.session.get(TrackModel, track_id)
        return _track_to_entity(model) if model else None

    async def list_all(self) -> list[Track]:
        """List all tracks, newest first."""
        stmt = select(TrackModel).order_by(TrackModel.created_at.desc())
        result = await self.session.execute(stmt)
        return [_track_to_entity(m) for m in result.scalars().all()]

    # Yo, ORDER BY random() is fine at catalog scale (thousands of rows). If the songs
    # table ever gets huge, switch to sampling ids first.
    async def sample(self, size: int) -> list[Track]:
        """Return up to `size` random tracks."""
        stmt = select(TrackModel).order_by(func.random()).limit(size)
        result = await self.session.execute(stmt)
        return [_track_to_entity(m) for m in result.scalars().all()]

    async def delete(self, track_id: str) -> None:
        """Delete a track. Album ordering follows automatically."""
        stmt = delete(TrackModel).where(TrackModel.id == track_id)
        result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise EntityNotFoundException("Song", track_id)

    async def count(self) -> int:
        """Count tracks."""
        result = await self.session.execute(select(func.count(TrackModel.id)))
        return result.scalar() or 0


class AlbumRepository(IAlbumRepository):
    """SQLAlchemy implementation of Album repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    def _model_to_entity(self, model: AlbumModel, with_tracks: bool = False) -> Album:
        """Convert AlbumModel to Album. Expects model.tracks to be loaded."""
        return Album(
            id=model.id,
            title=model.title,
            artist=model.artist,
            image_url=model.image_url,
            release_year=model.release_year,
            track_ids=tuple(t.id for t in model.tracks),
            tracks=tuple(_track_to_entity(t) for t in model.tracks) if with_tracks else (),
            created_at=ensure_utc_aware(model.created_at),
            updated_at=ensure_utc_aware(model.updated_at),
        )

    async def add(self, album: Album) -> None:
        """Add a new album."""
        model = AlbumModel(
            id=album.id,
            title=album.title,
            artist=album.artist,
            image_url=album.image_url,
            release_year=album.release_year,
        )
        self.session.add(model)
        await self.session.flush()

    async def get_by_id(self, album_id: str, with_tracks: bool = False) -> Album | None:
        """Get an album by ID, optionally with its ordered tracks."""
        stmt = (
            select(AlbumModel)
            .where(AlbumModel.id == album_id)
            .options(selectinload(AlbumModel.tracks))
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model, with_tracks=with_tracks) if model else None

    async def list_all(self) -> list[Album]:
        """List all albums, newest first."""
        stmt = (
            select(AlbumModel)
            .options(selectinload(AlbumModel.tracks))
            .order_by(AlbumModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._model_to_entity(m) for m in result.scalars().all()]

    # Listen up, deleting an album does NOT delete its songs - it only drops the back-reference.
    # We clear album_id explicitly instead of trusting ON DELETE SET NULL alone, because
    # SQLite connections without PRAGMA foreign_keys would silently leave dangling ids.
    async def delete(self, album_id: str) -> None:
        """Delete an album and detach its tracks."""
        await self.session.execute(
            update(TrackModel)
            .where(TrackModel.album_id == album_id)
            .values(album_id=None, position=None)
        )
        result = await self.session.execute(
            delete(AlbumModel).where(AlbumModel.id == album_id)
        )
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise EntityNotFoundException("Album", album_id)

    async def count(self) -> int:
        """Count albums."""
        result = await self.session.execute(select(func.count(AlbumModel.id)))
        return result.scalar() or 0


class StatsRepository(IStatsRepository):
    """Aggregate counters over songs, albums and users."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def count_artists(self) -> int:
        """Count distinct artist names across songs and albums."""
        artists = union(select(TrackModel.artist), select(AlbumModel.artist)).subquery()
        result = await self.session.execute(select(func.count()).select_from(artists))
        return result.scalar() or 0

    async def get_stats(self) -> CatalogStats:
        """Compute catalog counters."""
        return CatalogStats(
            total_songs=await TrackRepository(self.session).count(),
            total_albums=await AlbumRepository(self.session).count(),
            total_users=await UserRepository(self.session).count(),
            total_artists=await self.count_artists(),
        )

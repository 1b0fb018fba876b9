"""Catalog service - read and admin operations over songs, albums and stats."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from soundhaven.domain.entities import (
    Album,
    CatalogStats,
    SongCategory,
    Track,
    new_entity_id,
)
from soundhaven.domain.exceptions import EntityNotFoundException, ValidationException
from soundhaven.infrastructure.persistence.repositories import (
    AlbumRepository,
    StatsRepository,
    TrackRepository,
)

logger = logging.getLogger(__name__)


# How many random songs each shelf shows.
CATEGORY_SIZES: dict[SongCategory, int] = {
    SongCategory.MADE_FOR_YOU: 4,
    SongCategory.TRENDING: 4,
    SongCategory.FEATURED: 6,
}


class CatalogService:
    """Catalog operations for one request session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.tracks = TrackRepository(session)
        self.albums = AlbumRepository(session)
        self.stats = StatsRepository(session)

    async def list_albums(self) -> list[Album]:
        return await self.albums.list_all()

    async def get_album(self, album_id: str) -> Album:
        """Get an album with its ordered tracks.

        Raises:
            EntityNotFoundException: Unknown album id
        """
        album = await self.albums.get_by_id(album_id, with_tracks=True)
        if album is None:
            raise EntityNotFoundException("Album", album_id)
        return album

    async def list_songs(self) -> list[Track]:
        return await self.tracks.list_all()

    async def songs_for_category(self, category: SongCategory) -> list[Track]:
        """Random sample sized for the category shelf."""
        return await self.tracks.sample(CATEGORY_SIZES[category])

    async def get_stats(self) -> CatalogStats:
        return await self.stats.get_stats()

    async def create_song(
        self,
        title: str,
        artist: str,
        audio_url: str,
        image_url: str,
        duration_seconds: int,
        album_id: str | None = None,
    ) -> Track:
        """Create a song from already-uploaded media URLs."""
        if not title.strip() or not artist.strip():
            raise ValidationException("title and artist are required")
        track = Track(
            id=new_entity_id(),
            title=title.strip(),
            artist=artist.strip(),
            album_id=album_id or None,
            duration_seconds=duration_seconds,
            audio_url=audio_url,
            image_url=image_url,
        )
        await self.tracks.add(track)
        logger.info("Created song %s (%s - %s)", track.id, track.artist, track.title)
        created = await self.tracks.get_by_id(track.id)
        return created or track

    async def create_album(
        self,
        title: str,
        artist: str,
        image_url: str,
        release_year: int | None,
    ) -> Album:
        """Create an empty album."""
        if not title.strip() or not artist.strip():
            raise ValidationException("title and artist are required")
        album = Album(
            id=new_entity_id(),
            title=title.strip(),
            artist=artist.strip(),
            image_url=image_url,
            release_year=release_year,
        )
        await self.albums.add(album)
        logger.info("Created album %s (%s - %s)", album.id, album.artist, album.title)
        return album

    async def delete_song(self, song_id: str) -> None:
        """Delete a song; it drops out of its album's ordering."""
        await self.tracks.delete(song_id)
        logger.info("Deleted song %s", song_id)

    async def delete_album(self, album_id: str) -> None:
        """Delete an album; its songs stay, with album_id cleared."""
        await self.albums.delete(album_id)
        logger.info("Deleted album %s (songs detached)", album_id)

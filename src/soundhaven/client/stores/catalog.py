"""CatalogStore - client-side cache of albums, songs and catalog stats."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from soundhaven.client.notifications import Notifier
from soundhaven.client.payloads import (
    parse_album,
    parse_albums,
    parse_stats,
    parse_tracks,
)
from soundhaven.client.remote import RemoteClient
from soundhaven.client.stores.base import AsyncResourceStore
from soundhaven.domain.entities import Album, CatalogStats, SongCategory, Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of the catalog cache handed to UI code."""

    albums: tuple[Album, ...]
    songs: tuple[Track, ...]
    current_album: Album | None
    made_for_you_songs: tuple[Track, ...]
    trending_songs: tuple[Track, ...]
    featured_songs: tuple[Track, ...]
    stats: CatalogStats
    is_loading: bool
    error: str | None


# Category -> name of the slice it fills.
_CATEGORY_SLICES: dict[SongCategory, str] = {
    SongCategory.MADE_FOR_YOU: "made_for_you_songs",
    SongCategory.TRENDING: "trending_songs",
    SongCategory.FEATURED: "featured_songs",
}


class CatalogStore(AsyncResourceStore):
    """Albums/songs/stats cache fed by the catalog API.

    Reads replace their slice on success and keep stale data on failure. Deletes are
    not optimistic: the cache changes only after the server confirmed.
    """

    def __init__(self, remote: RemoteClient, notifier: Notifier | None = None) -> None:
        super().__init__(remote)
        self.notifier = notifier or Notifier()
        self.albums: tuple[Album, ...] = ()
        self.songs: tuple[Track, ...] = ()
        self.current_album: Album | None = None
        self.made_for_you_songs: tuple[Track, ...] = ()
        self.trending_songs: tuple[Track, ...] = ()
        self.featured_songs: tuple[Track, ...] = ()
        self.stats: CatalogStats = CatalogStats()

    # --- reads ---

    async def fetch_albums(self) -> bool:
        def apply(data: Any) -> None:
            self.albums = parse_albums(data)

        return await self.run("fetch_albums", lambda: self.remote.get("/albums"), apply)

    async def fetch_album_by_id(self, album_id: str) -> bool:
        def apply(data: Any) -> None:
            self.current_album = parse_album(data)

        return await self.run(
            "fetch_album_by_id",
            lambda: self.remote.get(f"/albums/{album_id}"),
            apply,
        )

    async def fetch_songs(self) -> bool:
        def apply(data: Any) -> None:
            self.songs = parse_tracks(data)

        return await self.run("fetch_songs", lambda: self.remote.get("/songs"), apply)

    async def fetch_songs_by_category(self, category: SongCategory | str) -> bool:
        """Refresh one of the home page shelves.

        Raises:
            ValueError: Unknown category (a programming error, not a remote failure)
        """
        category = SongCategory(category)
        slice_name = _CATEGORY_SLICES[category]

        def apply(data: Any) -> None:
            setattr(self, slice_name, parse_tracks(data))

        return await self.run(
            f"fetch_{slice_name}",
            lambda: self.remote.get(f"/songs/{category.value}"),
            apply,
        )

    async def fetch_made_for_you_songs(self) -> bool:
        return await self.fetch_songs_by_category(SongCategory.MADE_FOR_YOU)

    async def fetch_trending_songs(self) -> bool:
        return await self.fetch_songs_by_category(SongCategory.TRENDING)

    async def fetch_featured_songs(self) -> bool:
        return await self.fetch_songs_by_category(SongCategory.FEATURED)

    async def fetch_stats(self) -> bool:
        def apply(data: Any) -> None:
            self.stats = parse_stats(data)

        return await self.run("fetch_stats", lambda: self.remote.get("/stats"), apply)

    # --- deletes ---

    def _map_tracks(self, fn: Callable[[Track], Track | None]) -> None:
        """Apply fn to every cached track slice; None drops the track."""

        def apply(tracks: tuple[Track, ...]) -> tuple[Track, ...]:
            mapped = (fn(t) for t in tracks)
            return tuple(t for t in mapped if t is not None)

        self.songs = apply(self.songs)
        self.made_for_you_songs = apply(self.made_for_you_songs)
        self.trending_songs = apply(self.trending_songs)
        self.featured_songs = apply(self.featured_songs)

    async def delete_song(self, song_id: str) -> bool:
        """Delete a song on the server, then drop it from every cached slice."""

        def apply(_: Any) -> None:
            self._map_tracks(lambda t: None if t.id == song_id else t)
            self.albums = tuple(a.without_track(song_id) for a in self.albums)
            if self.current_album is not None:
                self.current_album = self.current_album.without_track(song_id)
            self.notifier.success("Song deleted successfully", song_id=song_id)

        def failed(error: str) -> None:
            self.notifier.error("Error deleting song", song_id=song_id, error=error)

        return await self.run(
            "delete_song",
            lambda: self.remote.delete(f"/admin/songs/{song_id}"),
            apply,
            failed,
        )

    async def delete_album(self, album_id: str) -> bool:
        """Delete an album on the server, then clean up references to it.

        Tracks that pointed at the album survive with album_id cleared. Matching is by
        album id only; two albums may share a title.
        """

        def apply(_: Any) -> None:
            self.albums = tuple(a for a in self.albums if a.id != album_id)
            self._map_tracks(
                lambda t: t.detach_from_album() if t.belongs_to(album_id) else t
            )
            if self.current_album is not None and self.current_album.id == album_id:
                self.current_album = None
            self.notifier.success("Album deleted successfully", album_id=album_id)

        def failed(error: str) -> None:
            self.notifier.error("Error deleting album", album_id=album_id, error=error)

        return await self.run(
            "delete_album",
            lambda: self.remote.delete(f"/admin/albums/{album_id}"),
            apply,
            failed,
        )

    def snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            albums=self.albums,
            songs=self.songs,
            current_album=self.current_album,
            made_for_you_songs=self.made_for_you_songs,
            trending_songs=self.trending_songs,
            featured_songs=self.featured_songs,
            stats=self.stats,
            is_loading=self.is_loading,
            error=self.error,
        )

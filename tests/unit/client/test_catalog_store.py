"""Tests for CatalogStore against a fake API."""

from typing import Any

import httpx
import pytest

from soundhaven.client import CatalogStore, InMemoryNotificationProvider, Notifier, RemoteClient
from soundhaven.client.stores import GENERIC_TRANSPORT_ERROR
from soundhaven.domain.entities import Album, CatalogStats, SongCategory, Track
from soundhaven.domain.ports import NotificationLevel


def track_json(track_id: str, title: str = "Song", album_id: str | None = None) -> dict[str, Any]:
    return {
        "id": track_id,
        "title": title,
        "artist": "Artist",
        "albumId": album_id,
        "durationSeconds": 180,
        "audioUrl": f"http://cdn/{track_id}.mp3",
        "imageUrl": f"http://cdn/{track_id}.jpg",
    }


def album_json(album_id: str, title: str = "Album", track_ids: list[str] | None = None):
    return {
        "id": album_id,
        "title": title,
        "artist": "Artist",
        "imageUrl": "",
        "releaseYear": 2020,
        "trackIds": track_ids or [],
    }


@pytest.fixture
def store(remote: RemoteClient, notifier: Notifier) -> CatalogStore:
    return CatalogStore(remote, notifier)


class TestReads:
    async def test_fetch_albums_replaces_slice(self, api, store: CatalogStore) -> None:
        api.json("GET", "/api/albums", [album_json("a1", track_ids=["t1"])])
        loading_during: list[bool] = []
        api.on_request = lambda _req: loading_during.append(store.is_loading)

        ok = await store.fetch_albums()

        assert ok is True
        assert loading_during == [True]
        assert store.is_loading is False
        assert store.error is None
        assert store.albums == (
            Album(
                id="a1",
                title="Album",
                artist="Artist",
                image_url="",
                release_year=2020,
                track_ids=("t1",),
            ),
        )

    async def test_failed_fetch_keeps_stale_data(self, api, store: CatalogStore) -> None:
        api.json("GET", "/api/albums", [album_json("a1")])
        await store.fetch_albums()
        api.json("GET", "/api/albums", {"message": "Database unavailable"}, status_code=503)

        ok = await store.fetch_albums()

        assert ok is False
        assert [a.id for a in store.albums] == ["a1"]
        assert store.error == "Database unavailable"
        assert store.is_loading is False

    async def test_fetch_album_by_id_embeds_tracks(self, api, store: CatalogStore) -> None:
        body = album_json("a1")
        body.pop("trackIds")
        body["tracks"] = [track_json("t2", album_id="a1"), track_json("t1", album_id="a1")]
        api.json("GET", "/api/albums/a1", body)

        await store.fetch_album_by_id("a1")

        assert store.current_album is not None
        assert store.current_album.track_ids == ("t2", "t1")
        assert store.current_album.tracks[0].audio_url == "http://cdn/t2.mp3"

    async def test_fetch_unknown_album_uses_server_message(self, api, store: CatalogStore) -> None:
        api.json("GET", "/api/albums/nope", {"message": "Album not found: nope"}, 404)

        await store.fetch_album_by_id("nope")

        assert store.current_album is None
        assert store.error == "Album not found: nope"

    async def test_fetch_stats_transport_error(self, api, store: CatalogStore) -> None:
        api.fail("GET", "/api/stats", httpx.ConnectError("connection refused"))

        ok = await store.fetch_stats()

        assert ok is False
        assert store.error == GENERIC_TRANSPORT_ERROR
        assert store.is_loading is False
        assert store.stats == CatalogStats()

    async def test_fetch_stats(self, api, store: CatalogStore) -> None:
        api.json(
            "GET",
            "/api/stats",
            {"totalSongs": 3, "totalAlbums": 1, "totalUsers": 2, "totalArtists": 2},
        )

        await store.fetch_stats()

        assert store.stats == CatalogStats(3, 1, 2, 2)

    @pytest.mark.parametrize(
        ("category", "attribute"),
        [
            (SongCategory.MADE_FOR_YOU, "made_for_you_songs"),
            (SongCategory.TRENDING, "trending_songs"),
            (SongCategory.FEATURED, "featured_songs"),
        ],
    )
    async def test_fetch_songs_by_category(
        self, api, store: CatalogStore, category: SongCategory, attribute: str
    ) -> None:
        api.json("GET", f"/api/songs/{category.value}", [track_json("t1"), track_json("t2")])

        await store.fetch_songs_by_category(category.value)

        assert [t.id for t in getattr(store, attribute)] == ["t1", "t2"]
        # The other shelves and the full song list are untouched.
        assert store.songs == ()

    async def test_convenience_category_methods(self, api, store: CatalogStore) -> None:
        api.json("GET", "/api/songs/trending", [track_json("t9")])

        await store.fetch_trending_songs()

        assert [t.id for t in store.trending_songs] == ["t9"]
        assert store.operation_status("fetch_trending_songs").error is None

    async def test_unknown_category_is_a_programming_error(self, store: CatalogStore) -> None:
        with pytest.raises(ValueError):
            await store.fetch_songs_by_category("polka")

    async def test_unexpected_payload_shape_becomes_error(self, api, store: CatalogStore) -> None:
        api.json("GET", "/api/songs", {"not": "a list"})

        ok = await store.fetch_songs()

        assert ok is False
        assert store.songs == ()
        assert store.error is not None


class TestDeletes:
    @pytest.fixture
    async def seeded(self, api, store: CatalogStore) -> CatalogStore:
        api.json(
            "GET",
            "/api/albums",
            [album_json("a1", "Twin", ["t1"]), album_json("a2", "Twin", ["t2"])],
        )
        api.json(
            "GET",
            "/api/songs",
            [
                track_json("t1", album_id="a1"),
                track_json("t2", album_id="a2"),
                track_json("t3"),
            ],
        )
        api.json("GET", "/api/songs/featured", [track_json("t1", album_id="a1")])
        await store.fetch_albums()
        await store.fetch_songs()
        await store.fetch_featured_songs()
        return store

    async def test_delete_song_removes_it_everywhere(
        self, api, seeded: CatalogStore, toasts: InMemoryNotificationProvider
    ) -> None:
        api.json("DELETE", "/api/admin/songs/t1", {"message": "Song deleted successfully"})

        ok = await seeded.delete_song("t1")

        assert ok is True
        assert [t.id for t in seeded.songs] == ["t2", "t3"]
        assert seeded.featured_songs == ()
        assert seeded.albums[0].track_ids == ()
        assert [(n.level, n.message) for n in toasts.items] == [
            (NotificationLevel.SUCCESS, "Song deleted successfully")
        ]

    async def test_failed_delete_song_changes_nothing(
        self, api, seeded: CatalogStore, toasts: InMemoryNotificationProvider
    ) -> None:
        api.json("DELETE", "/api/admin/songs/t1", {"message": "Internal server error"}, 500)

        ok = await seeded.delete_song("t1")

        assert ok is False
        assert [t.id for t in seeded.songs] == ["t1", "t2", "t3"]
        assert seeded.error == "Internal server error"
        assert [(n.level, n.message) for n in toasts.items] == [
            (NotificationLevel.ERROR, "Error deleting song")
        ]

    async def test_delete_album_detaches_by_identity(
        self, api, seeded: CatalogStore, toasts: InMemoryNotificationProvider
    ) -> None:
        """Both albums are titled "Twin" - only the deleted id may be touched."""
        api.json("DELETE", "/api/admin/albums/a1", {"message": "Album deleted successfully"})

        ok = await seeded.delete_album("a1")

        assert ok is True
        assert [a.id for a in seeded.albums] == ["a2"]
        songs = {t.id: t for t in seeded.songs}
        assert songs["t1"].album_id is None
        assert songs["t2"].album_id == "a2"
        assert songs["t3"].album_id is None
        assert len(seeded.songs) == 3
        assert seeded.featured_songs[0].album_id is None
        assert toasts.items[-1].message == "Album deleted successfully"

    async def test_delete_album_resets_current_album(self, api, seeded: CatalogStore) -> None:
        api.json("GET", "/api/albums/a1", album_json("a1", "Twin", ["t1"]))
        api.json("DELETE", "/api/admin/albums/a1", {"message": "Album deleted successfully"})
        await seeded.fetch_album_by_id("a1")

        await seeded.delete_album("a1")

        assert seeded.current_album is None

    async def test_failed_delete_album_changes_nothing(
        self, api, seeded: CatalogStore, toasts: InMemoryNotificationProvider
    ) -> None:
        api.fail("DELETE", "/api/admin/albums/a1", httpx.ReadTimeout("slow"))

        ok = await seeded.delete_album("a1")

        assert ok is False
        assert [a.id for a in seeded.albums] == ["a1", "a2"]
        assert next(t for t in seeded.songs if t.id == "t1").album_id == "a1"
        assert seeded.error == GENERIC_TRANSPORT_ERROR
        assert toasts.items[-1].level == NotificationLevel.ERROR
        assert toasts.items[-1].message == "Error deleting album"


class TestSnapshot:
    async def test_snapshot_is_detached_from_later_changes(
        self, api, store: CatalogStore
    ) -> None:
        api.json("GET", "/api/songs", [track_json("t1")])
        await store.fetch_songs()
        before = store.snapshot()
        api.json("DELETE", "/api/admin/songs/t1", {"message": "Song deleted successfully"})

        await store.delete_song("t1")

        expected = Track(
            id="t1",
            title="Song",
            artist="Artist",
            duration_seconds=180,
            audio_url="http://cdn/t1.mp3",
            image_url="http://cdn/t1.jpg",
        )
        assert before.songs == (expected,)
        assert store.snapshot().songs == ()

    async def test_listener_called_on_changes(self, api, store: CatalogStore) -> None:
        api.json("GET", "/api/stats", {"totalSongs": 1})
        snapshots = []
        store.subscribe(lambda s: snapshots.append(s.snapshot()))

        await store.fetch_stats()

        assert [s.is_loading for s in snapshots] == [True, False]
        assert snapshots[-1].stats.total_songs == 1


async def test_admin_header_forwarded(api, remote: RemoteClient) -> None:
    api.json("DELETE", "/api/admin/songs/t1", {"message": "Song deleted successfully"})
    remote.set_user_id("ext-admin")
    store = CatalogStore(remote, Notifier())

    await store.delete_song("t1")

    assert api.requests[-1].headers["X-User-Id"] == "ext-admin"

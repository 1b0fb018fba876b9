"""Parsing of API JSON into domain entities on the client side.

The server speaks camelCase. These models accept it, ignore fields they don't know
(the server may add some), and hand back frozen domain entities for the stores.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from soundhaven.domain.entities import Album, CatalogStats, Track


class _Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class TrackPayload(_Payload):
    id: str
    title: str
    artist: str
    album_id: str | None = None
    duration_seconds: int = 0
    audio_url: str = ""
    image_url: str = ""

    def to_entity(self) -> Track:
        return Track(
            id=self.id,
            title=self.title,
            artist=self.artist,
            album_id=self.album_id,
            duration_seconds=self.duration_seconds,
            audio_url=self.audio_url,
            image_url=self.image_url,
        )


class AlbumPayload(_Payload):
    id: str
    title: str
    artist: str
    image_url: str = ""
    release_year: int | None = None
    track_ids: list[str] = Field(default_factory=list)
    tracks: list[TrackPayload] = Field(default_factory=list)

    def to_entity(self) -> Album:
        tracks = tuple(t.to_entity() for t in self.tracks)
        # Detail responses embed tracks; derive the ordering from them if ids are absent.
        track_ids = tuple(self.track_ids) or tuple(t.id for t in tracks)
        return Album(
            id=self.id,
            title=self.title,
            artist=self.artist,
            image_url=self.image_url,
            release_year=self.release_year,
            track_ids=track_ids,
            tracks=tracks,
        )


class StatsPayload(_Payload):
    total_songs: int = 0
    total_albums: int = 0
    total_users: int = 0
    total_artists: int = 0

    def to_entity(self) -> CatalogStats:
        return CatalogStats(
            total_songs=self.total_songs,
            total_albums=self.total_albums,
            total_users=self.total_users,
            total_artists=self.total_artists,
        )


_tracks_adapter = TypeAdapter(list[TrackPayload])
_albums_adapter = TypeAdapter(list[AlbumPayload])


def parse_tracks(data: Any) -> tuple[Track, ...]:
    """Parse a JSON array of songs, preserving server order."""
    return tuple(p.to_entity() for p in _tracks_adapter.validate_python(data))


def parse_albums(data: Any) -> tuple[Album, ...]:
    """Parse a JSON array of albums, preserving server order."""
    return tuple(p.to_entity() for p in _albums_adapter.validate_python(data))


def parse_album(data: Any) -> Album:
    return AlbumPayload.model_validate(data).to_entity()


def parse_stats(data: Any) -> CatalogStats:
    return StatsPayload.model_validate(data).to_entity()

"""Pydantic request/response models.

Hey future me - the wire format is camelCase (albumId, imageUrl, ...) because that's what
the client expects, Python stays snake_case. The alias generator does the mapping;
populate_by_name lets tests and internal code build models with snake_case kwargs.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from soundhaven.domain.entities import Album, CatalogStats, Track, User


class CamelModel(BaseModel):
    """Base model serializing to camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrackResponse(CamelModel):
    id: str
    title: str
    artist: str
    album_id: str | None = None
    duration_seconds: int = 0
    audio_url: str = ""
    image_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, track: Track) -> "TrackResponse":
        return cls(
            id=track.id,
            title=track.title,
            artist=track.artist,
            album_id=track.album_id,
            duration_seconds=track.duration_seconds,
            audio_url=track.audio_url,
            image_url=track.image_url,
            created_at=track.created_at,
            updated_at=track.updated_at,
        )


class AlbumResponse(CamelModel):
    id: str
    title: str
    artist: str
    image_url: str = ""
    release_year: int | None = None
    track_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, album: Album) -> "AlbumResponse":
        return cls(
            id=album.id,
            title=album.title,
            artist=album.artist,
            image_url=album.image_url,
            release_year=album.release_year,
            track_ids=list(album.track_ids),
        )


class AlbumDetailResponse(AlbumResponse):
    """Album with its tracks embedded in album order."""

    tracks: list[TrackResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, album: Album) -> "AlbumDetailResponse":
        return cls(
            **AlbumResponse.from_entity(album).model_dump(),
            tracks=[TrackResponse.from_entity(t) for t in album.tracks],
        )


class StatsResponse(CamelModel):
    total_songs: int
    total_albums: int
    total_users: int
    total_artists: int

    @classmethod
    def from_entity(cls, stats: CatalogStats) -> "StatsResponse":
        return cls(
            total_songs=stats.total_songs,
            total_albums=stats.total_albums,
            total_users=stats.total_users,
            total_artists=stats.total_artists,
        )


class UserResponse(CamelModel):
    external_id: str
    display_name: str
    avatar_url: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            external_id=user.external_id,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
        )


class AuthCallbackRequest(CamelModel):
    """Profile fields forwarded after the identity provider verified the user."""

    id: str = Field(min_length=1, description="External identity")
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True


class MessageResponse(BaseModel):
    message: str


class AdminCheckResponse(BaseModel):
    admin: bool


class CreateSongRequest(CamelModel):
    title: str = Field(min_length=1)
    artist: str = Field(min_length=1)
    audio_url: str = Field(min_length=1)
    image_url: str = ""
    duration_seconds: int = Field(default=0, ge=0)
    album_id: str | None = None


class CreateAlbumRequest(CamelModel):
    title: str = Field(min_length=1)
    artist: str = Field(min_length=1)
    image_url: str = ""
    release_year: int | None = Field(default=None, ge=0)

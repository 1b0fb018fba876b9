"""Domain entities."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum

from soundhaven.domain.exceptions import ValidationException


def _utc_now() -> datetime:
    return datetime.now(UTC)


def new_entity_id() -> str:
    """Generate a fresh entity identifier."""
    return str(uuid.uuid4())


# Hey future me, User is keyed by external_id - the opaque id handed to us by the identity
# provider. Our own `id` is internal only; nothing outside the server ever looks users up by
# it. display_name is built ONCE at provisioning time and never touched again by this flow.
@dataclass
class User:
    """A locally provisioned user."""

    external_id: str
    display_name: str
    avatar_url: str
    id: str = field(default_factory=new_entity_id)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if not self.external_id or not self.external_id.strip():
            raise ValidationException("external_id must not be empty")

    @staticmethod
    def build_display_name(first_name: str | None, last_name: str | None) -> str:
        """Join name parts, treating missing parts as empty, then trim."""
        return f"{first_name or ''} {last_name or ''}".strip()


# Yo, Track is frozen on purpose: the client cache replaces tracks instead of editing them
# in place, so a snapshot handed to the UI never changes under its feet. Use
# detach_from_album() to get the back-reference-cleared copy.
@dataclass(frozen=True)
class Track:
    """A song in the catalog."""

    id: str
    title: str
    artist: str
    album_id: str | None = None
    duration_seconds: int = 0
    audio_url: str = ""
    image_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def belongs_to(self, album_id: str) -> bool:
        """Check whether this track references the given album by identity."""
        return self.album_id is not None and self.album_id == album_id

    def detach_from_album(self) -> "Track":
        """Return a copy with the album back-reference cleared."""
        return replace(self, album_id=None)


@dataclass(frozen=True)
class Album:
    """An album with an ordered list of track ids."""

    id: str
    title: str
    artist: str
    image_url: str = ""
    release_year: int | None = None
    track_ids: tuple[str, ...] = ()
    # Only filled for single-album reads (GET /albums/{id}).
    tracks: tuple[Track, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def without_track(self, track_id: str) -> "Album":
        """Return a copy with the given track id removed from the ordering."""
        return replace(
            self,
            track_ids=tuple(t for t in self.track_ids if t != track_id),
            tracks=tuple(t for t in self.tracks if t.id != track_id),
        )


class SongCategory(str, Enum):
    """Curated song shelves shown on the home page."""

    MADE_FOR_YOU = "made-for-you"
    TRENDING = "trending"
    FEATURED = "featured"


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate catalog counters."""

    total_songs: int = 0
    total_albums: int = 0
    total_users: int = 0
    total_artists: int = 0


__all__ = [
    "Album",
    "CatalogStats",
    "SongCategory",
    "Track",
    "User",
    "new_entity_id",
]

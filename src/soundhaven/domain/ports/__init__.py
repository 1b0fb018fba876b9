"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod

from soundhaven.domain.entities import Album, CatalogStats, Track, User
from soundhaven.domain.ports.notification import (
    INotificationProvider,
    Notification,
    NotificationLevel,
)


class IUserRepository(ABC):
    """Repository interface for User entities."""

    @abstractmethod
    async def add(self, user: User) -> None:
        """Add a new user.

        Raises:
            DuplicateEntityException: A user with the same external_id already exists
        """
        pass

    @abstractmethod
    async def get_by_external_id(self, external_id: str) -> User | None:
        """Get a user by external identity."""
        pass

    @abstractmethod
    async def list_all(self, exclude_external_id: str | None = None) -> list[User]:
        """List users, optionally leaving out one external identity."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count users."""
        pass


class ITrackRepository(ABC):
    """Repository interface for Track entities."""

    @abstractmethod
    async def add(self, track: Track) -> None:
        """Add a new track."""
        pass

    @abstractmethod
    async def get_by_id(self, track_id: str) -> Track | None:
        """Get a track by ID."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Track]:
        """List all tracks, newest first."""
        pass

    @abstractmethod
    async def sample(self, size: int) -> list[Track]:
        """Return up to `size` random tracks."""
        pass

    @abstractmethod
    async def delete(self, track_id: str) -> None:
        """Delete a track.

        Raises:
            EntityNotFoundException: If the track does not exist
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count tracks."""
        pass


class IAlbumRepository(ABC):
    """Repository interface for Album entities."""

    @abstractmethod
    async def add(self, album: Album) -> None:
        """Add a new album."""
        pass

    @abstractmethod
    async def get_by_id(self, album_id: str, with_tracks: bool = False) -> Album | None:
        """Get an album by ID, optionally with its ordered tracks."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Album]:
        """List all albums."""
        pass

    @abstractmethod
    async def delete(self, album_id: str) -> None:
        """Delete an album, clearing album_id on its tracks.

        Raises:
            EntityNotFoundException: If the album does not exist
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count albums."""
        pass


class IStatsRepository(ABC):
    """Read-only aggregate queries over the catalog."""

    @abstractmethod
    async def get_stats(self) -> CatalogStats:
        """Compute catalog counters."""
        pass


__all__ = [
    "IAlbumRepository",
    "INotificationProvider",
    "IStatsRepository",
    "ITrackRepository",
    "IUserRepository",
    "Notification",
    "NotificationLevel",
]

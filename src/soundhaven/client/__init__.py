"""Client side of SoundHaven: HTTP access plus the state stores UI code reads from."""

from soundhaven.client.notifications import (
    InMemoryNotificationProvider,
    LoggingNotificationProvider,
    Notifier,
)
from soundhaven.client.remote import RemoteClient
from soundhaven.client.stores import (
    AuthStore,
    CatalogStore,
    PlaybackStateMachine,
    PlaybackStatus,
)

__all__ = [
    "AuthStore",
    "CatalogStore",
    "InMemoryNotificationProvider",
    "LoggingNotificationProvider",
    "Notifier",
    "PlaybackStateMachine",
    "PlaybackStatus",
    "RemoteClient",
]

"""Client-side state stores."""

from soundhaven.client.stores.auth import AuthStore
from soundhaven.client.stores.base import (
    GENERIC_TRANSPORT_ERROR,
    AsyncResourceStore,
    FetchState,
    OperationStatus,
    describe_error,
)
from soundhaven.client.stores.catalog import CatalogSnapshot, CatalogStore
from soundhaven.client.stores.playback import (
    PlaybackSnapshot,
    PlaybackStateMachine,
    PlaybackStatus,
)

__all__ = [
    "GENERIC_TRANSPORT_ERROR",
    "AsyncResourceStore",
    "AuthStore",
    "CatalogSnapshot",
    "CatalogStore",
    "FetchState",
    "OperationStatus",
    "PlaybackSnapshot",
    "PlaybackStateMachine",
    "PlaybackStatus",
    "describe_error",
]

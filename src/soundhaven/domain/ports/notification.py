"""Notification provider interface.

Hey future me - this is the PORT for user-visible notifications (the "toast" channel)!
Client stores emit a Notification after a mutation succeeds or fails; the UI plugs in a
provider that actually shows it. The application layer never knows how it's rendered.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class NotificationLevel(str, Enum):
    """Severity of a notification."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Notification:
    """Notification payload handed to providers.

    Example:
        Notification(
            level=NotificationLevel.SUCCESS,
            message="Song deleted successfully",
            data={"song_id": "abc"},
        )
    """

    level: NotificationLevel
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class INotificationProvider(ABC):
    """Interface for notification channels."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this provider."""
        pass

    @abstractmethod
    def send(self, notification: Notification) -> None:
        """Deliver the notification.

        Implementations must not raise for delivery problems; log instead.
        """
        pass

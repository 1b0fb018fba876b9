"""Notifier - fans user-visible notifications out to the registered providers.

Hey future me - this is the Python side of the UI "toast". Stores call
notifier.success(...) / notifier.error(...) after a mutation; whatever providers the UI
registered decide how to show it. With no providers registered we still log, so a
headless client never loses a notification silently.
"""

import logging
from collections import deque
from typing import Any

from soundhaven.domain.ports.notification import (
    INotificationProvider,
    Notification,
    NotificationLevel,
)

logger = logging.getLogger(__name__)


class LoggingNotificationProvider(INotificationProvider):
    """Writes notifications to the log."""

    @property
    def name(self) -> str:
        return "logging"

    def send(self, notification: Notification) -> None:
        level = (
            logging.WARNING
            if notification.level == NotificationLevel.ERROR
            else logging.INFO
        )
        logger.log(
            level,
            "[NOTIFICATION] %s: %s",
            notification.level.value,
            notification.message,
            extra={"notification_data": notification.data},
        )


class InMemoryNotificationProvider(INotificationProvider):
    """Keeps the most recent notifications for a UI to poll and render."""

    def __init__(self, max_items: int = 50) -> None:
        self._items: deque[Notification] = deque(maxlen=max_items)

    @property
    def name(self) -> str:
        return "in_memory"

    def send(self, notification: Notification) -> None:
        self._items.append(notification)

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    def drain(self) -> list[Notification]:
        """Return and forget all pending notifications."""
        items = list(self._items)
        self._items.clear()
        return items


class Notifier:
    """Sends notifications to every registered provider."""

    def __init__(self, providers: list[INotificationProvider] | None = None) -> None:
        self._providers: list[INotificationProvider] = list(providers or [])

    def add_provider(self, provider: INotificationProvider) -> None:
        self._providers.append(provider)

    def notify(self, notification: Notification) -> None:
        if not self._providers:
            LoggingNotificationProvider().send(notification)
            return
        for provider in self._providers:
            try:
                provider.send(notification)
            except Exception:
                # One broken channel must not hide the toast from the others.
                logger.exception("Notification provider %s failed", provider.name)

    def success(self, message: str, **data: Any) -> None:
        self.notify(Notification(level=NotificationLevel.SUCCESS, message=message, data=data))

    def error(self, message: str, **data: Any) -> None:
        self.notify(Notification(level=NotificationLevel.ERROR, message=message, data=data))

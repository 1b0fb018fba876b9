"""Playback state machine - which track is current and whether it is playing.

Hey future me - this holds NO audio. It's the tiny state machine the play buttons and
the player bar read from:

    IDLE --select/set--> PLAYING(t) <--toggle--> PAUSED(t)
      ^                                             |
      +------------------- stop() -----------------+

Selecting the track that is already current toggles instead of restarting it.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from soundhaven.domain.entities import Track

logger = logging.getLogger(__name__)


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    PAUSED = "paused"
    PLAYING = "playing"


@dataclass(frozen=True)
class PlaybackSnapshot:
    current_track: Track | None
    status: PlaybackStatus

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING


class PlaybackStateMachine:
    """Current track plus play/pause status."""

    def __init__(self) -> None:
        self._current_track: Track | None = None
        self._status = PlaybackStatus.IDLE
        self._listeners: list[Callable[["PlaybackStateMachine"], None]] = []

    @property
    def current_track(self) -> Track | None:
        return self._current_track

    @property
    def state(self) -> PlaybackStatus:
        return self._status

    @property
    def is_playing(self) -> bool:
        return self._status == PlaybackStatus.PLAYING

    def subscribe(
        self, listener: Callable[["PlaybackStateMachine"], None]
    ) -> Callable[[], None]:
        """Register a listener; returns the matching unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _transition(self, track: Track | None, status: PlaybackStatus) -> None:
        if track is self._current_track and status == self._status:
            return
        logger.debug(
            "Playback %s -> %s (%s)",
            self._status.value,
            status.value,
            track.id if track else None,
        )
        self._current_track = track
        self._status = status
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Playback listener %r failed", listener)

    def is_current(self, track: Track) -> bool:
        return self._current_track is not None and self._current_track.id == track.id

    def select_track(self, track: Track) -> None:
        """Play/pause button on a track row: toggle if current, else start it."""
        if self.is_current(track):
            self.toggle_play()
        else:
            self.set_current_track(track)

    def set_current_track(self, track: Track) -> None:
        """Make track current and start playing it."""
        self._transition(track, PlaybackStatus.PLAYING)

    def toggle_play(self) -> None:
        """Flip between playing and paused. Does nothing while idle."""
        if self._status == PlaybackStatus.PLAYING:
            self.pause()
        elif self._status == PlaybackStatus.PAUSED:
            self.play()

    def play(self) -> None:
        if self._current_track is not None:
            self._transition(self._current_track, PlaybackStatus.PLAYING)

    def pause(self) -> None:
        if self._current_track is not None:
            self._transition(self._current_track, PlaybackStatus.PAUSED)

    def stop(self) -> None:
        self._transition(None, PlaybackStatus.IDLE)

    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(current_track=self._current_track, status=self._status)

"""SoundHaven - music catalog backend and client-side state stores."""

__version__ = "0.1.0"

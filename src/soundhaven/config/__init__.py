"""Configuration module for SoundHaven."""

from .settings import (
    ApiSettings,
    ClientSettings,
    DatabaseSettings,
    ObservabilitySettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "ClientSettings",
    "DatabaseSettings",
    "ObservabilitySettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]

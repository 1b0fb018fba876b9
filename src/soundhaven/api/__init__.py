"""API module for SoundHaven.

Structure:
- routers/: API endpoints (auth, songs, albums, stats, admin, users, health)
- schemas/: Pydantic request/response models
- dependencies.py: Dependency injection (sessions, services, admin guard)
- exception_handlers.py: Global error handlers
"""

from soundhaven.api.routers import api_router

__all__ = ["api_router"]

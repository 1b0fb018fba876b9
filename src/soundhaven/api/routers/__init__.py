"""API router initialization."""

# Hey future me, this is the MAIN API router aggregator. main.py mounts it under /api, so
# the prefixes below become /api/auth/callback, /api/songs/trending, and so on. health lives
# outside /api (see main.py) so load balancers can probe it without the API prefix.

from fastapi import APIRouter

from soundhaven.api.routers import admin, albums, auth, health, songs, stats, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(songs.router, prefix="/songs", tags=["Songs"])
api_router.include_router(albums.router, prefix="/albums", tags=["Albums"])
api_router.include_router(stats.router, prefix="/stats", tags=["Stats"])

__all__ = [
    "admin",
    "albums",
    "api_router",
    "auth",
    "health",
    "songs",
    "stats",
    "users",
]

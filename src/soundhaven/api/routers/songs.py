"""Song read endpoints, including the curated home-page shelves."""

from fastapi import APIRouter, Depends

from soundhaven.api.dependencies import get_catalog_service
from soundhaven.api.schemas import TrackResponse
from soundhaven.application.services import CatalogService
from soundhaven.domain.entities import SongCategory

router = APIRouter()


@router.get("")
async def list_songs(
    service: CatalogService = Depends(get_catalog_service),
) -> list[TrackResponse]:
    """List all songs, newest first."""
    return [TrackResponse.from_entity(t) for t in await service.list_songs()]


# Yo, the three shelves are random samples for now. The path segment IS the category
# value, so a new SongCategory member gets a route for free.
@router.get("/{category}")
async def list_songs_for_category(
    category: SongCategory,
    service: CatalogService = Depends(get_catalog_service),
) -> list[TrackResponse]:
    """Songs for the made-for-you, trending or featured shelf."""
    return [TrackResponse.from_entity(t) for t in await service.songs_for_category(category)]

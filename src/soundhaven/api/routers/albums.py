"""Album read endpoints."""

from fastapi import APIRouter, Depends

from soundhaven.api.dependencies import get_catalog_service
from soundhaven.api.schemas import AlbumDetailResponse, AlbumResponse
from soundhaven.application.services import CatalogService

router = APIRouter()


@router.get("")
async def list_albums(
    service: CatalogService = Depends(get_catalog_service),
) -> list[AlbumResponse]:
    """List all albums, newest first."""
    albums = await service.list_albums()
    return [AlbumResponse.from_entity(a) for a in albums]


@router.get("/{album_id}")
async def get_album(
    album_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> AlbumDetailResponse:
    """Get one album with its tracks in album order (404 if unknown)."""
    album = await service.get_album(album_id)
    return AlbumDetailResponse.from_entity(album)

"""Admin endpoints - create and delete catalog entries.

Media files are handled by the upload collaborator; these endpoints only receive the
resulting URLs.
"""

import logging

from fastapi import APIRouter, Depends, status

from soundhaven.api.dependencies import (
    get_app_settings,
    get_catalog_service,
    get_current_external_id,
    is_admin,
    require_admin,
)
from soundhaven.api.schemas import (
    AdminCheckResponse,
    AlbumResponse,
    CreateAlbumRequest,
    CreateSongRequest,
    MessageResponse,
    TrackResponse,
)
from soundhaven.application.services import CatalogService
from soundhaven.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/check")
async def check_admin(
    external_id: str | None = Depends(get_current_external_id),
    settings: Settings = Depends(get_app_settings),
) -> AdminCheckResponse:
    """Tell the UI whether to show admin controls."""
    return AdminCheckResponse(admin=is_admin(external_id, settings))


@router.post(
    "/songs",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_song(
    payload: CreateSongRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> TrackResponse:
    track = await service.create_song(
        title=payload.title,
        artist=payload.artist,
        audio_url=payload.audio_url,
        image_url=payload.image_url,
        duration_seconds=payload.duration_seconds,
        album_id=payload.album_id,
    )
    return TrackResponse.from_entity(track)


@router.delete("/songs/{song_id}", dependencies=[Depends(require_admin)])
async def delete_song(
    song_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    await service.delete_song(song_id)
    return MessageResponse(message="Song deleted successfully")


@router.post(
    "/albums",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_album(
    payload: CreateAlbumRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> AlbumResponse:
    album = await service.create_album(
        title=payload.title,
        artist=payload.artist,
        image_url=payload.image_url,
        release_year=payload.release_year,
    )
    return AlbumResponse.from_entity(album)


# Hey future me - this does NOT delete the album's songs! They stay in the catalog with
# albumId cleared. The client store mirrors exactly that after a successful delete.
@router.delete("/albums/{album_id}", dependencies=[Depends(require_admin)])
async def delete_album(
    album_id: str,
    service: CatalogService = Depends(get_catalog_service),
) -> MessageResponse:
    await service.delete_album(album_id)
    return MessageResponse(message="Album deleted successfully")

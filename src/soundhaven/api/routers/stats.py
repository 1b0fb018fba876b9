"""Catalog stats endpoint for the dashboard."""

from fastapi import APIRouter, Depends

from soundhaven.api.dependencies import get_catalog_service
from soundhaven.api.schemas import StatsResponse
from soundhaven.application.services import CatalogService

router = APIRouter()


@router.get("")
async def get_stats(
    service: CatalogService = Depends(get_catalog_service),
) -> StatsResponse:
    """Totals for songs, albums, users and distinct artists."""
    return StatsResponse.from_entity(await service.get_stats())

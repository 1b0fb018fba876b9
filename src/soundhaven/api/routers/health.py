"""Liveness endpoint."""

from typing import Any

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict[str, Any]:
    """Report whether the app finished starting up."""
    worker = getattr(request.app.state, "temp_cleanup_worker", None)
    return {
        "status": "ok",
        "database": getattr(request.app.state, "db", None) is not None,
        "temp_cleanup": worker.get_stats() if worker is not None else None,
    }

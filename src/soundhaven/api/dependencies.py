"""Dependency injection for API endpoints."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from soundhaven.application.services import CatalogService, IdentityProvisioner
from soundhaven.config import Settings
from soundhaven.domain.exceptions import AuthorizationError
from soundhaven.infrastructure.persistence import Database, UserRepository

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with (may differ from get_settings() in tests)."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """Get the Database from app state.

    Raises:
        HTTPException: 503 if the database was not initialized
    """
    db: Database | None = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return db


# Hey future me - one session per request, committed when the endpoint returns cleanly and
# rolled back on any exception. Use in endpoints as
# "session: AsyncSession = Depends(get_db_session)".
async def get_db_session(
    db: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a transactional session for the request."""
    async with db.session_scope() as session:
        yield session


def get_catalog_service(
    session: AsyncSession = Depends(get_db_session),
) -> CatalogService:
    return CatalogService(session)


# Yo, the provisioner does NOT share the request session. It opens its own scope per call
# so a lost duplicate-key race rolls back only its own insert.
def get_identity_provisioner(db: Database = Depends(get_database)) -> IdentityProvisioner:
    return IdentityProvisioner(db.session_scope)


def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return UserRepository(session)


# Listen up, token verification is NOT our job. The upstream identity middleware verifies
# the assertion and forwards the external id in X-User-Id; we only read it.
def get_current_external_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str | None:
    """External id of the caller, if the request was authenticated upstream."""
    return x_user_id or None


def is_admin(external_id: str | None, settings: Settings) -> bool:
    """An empty admin list means every caller is an admin (local development)."""
    admin_ids = settings.api.admin_ids
    if not admin_ids:
        return True
    return external_id is not None and external_id in admin_ids


def require_admin(
    external_id: str | None = Depends(get_current_external_id),
    settings: Settings = Depends(get_app_settings),
) -> str | None:
    """Guard for /admin routes.

    Raises:
        AuthorizationError: Caller is not in the admin list
    """
    if not is_admin(external_id, settings):
        logger.warning("Rejected admin request from %s", external_id or "anonymous")
        raise AuthorizationError("Unauthorized - you must be an admin")
    return external_id

"""Auth callback - provisions a local user after the identity provider signs someone in."""

import logging

from fastapi import APIRouter, Depends

from soundhaven.api.dependencies import get_identity_provisioner
from soundhaven.api.schemas import AuthCallbackRequest, SuccessResponse
from soundhaven.application.services import IdentityProvisioner

logger = logging.getLogger(__name__)

router = APIRouter()


# Hey future me - the frontend calls this on EVERY session bootstrap, often several times in
# parallel (tabs, StrictMode double effects, retries). That's why it must be idempotent:
# created or already there, the answer is the same 200 {"success": true}.
@router.post("/callback")
async def auth_callback(
    payload: AuthCallbackRequest,
    provisioner: IdentityProvisioner = Depends(get_identity_provisioner),
) -> SuccessResponse:
    """Ensure a user record exists for the signed-in identity."""
    created = await provisioner.provision(
        external_id=payload.id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        avatar_url=payload.image_url,
    )
    logger.debug("Auth callback for %s (created=%s)", payload.id, created)
    return SuccessResponse(success=True)

"""AuthStore - bootstraps the signed-in session against the API."""

import logging
from dataclasses import dataclass
from typing import Any

from soundhaven.client.remote import RemoteClient
from soundhaven.client.stores.base import AsyncResourceStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSnapshot:
    external_id: str | None
    is_synced: bool
    is_admin: bool
    is_loading: bool
    error: str | None


class AuthStore(AsyncResourceStore):
    """Session state: who is signed in, whether they are provisioned, and admin flag.

    The identity provider has already authenticated the user; this store only makes
    sure the server knows about them and asks whether admin controls should show.
    """

    def __init__(self, remote: RemoteClient) -> None:
        super().__init__(remote)
        self.external_id: str | None = None
        self.is_synced: bool = False
        self.is_admin: bool = False

    # Hey future me - safe to call on every page load. The server provisions idempotently,
    # so repeated or parallel calls for the same identity all come back as success.
    async def sync_user(
        self,
        external_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        image_url: str = "",
    ) -> bool:
        payload = {
            "id": external_id,
            "firstName": first_name,
            "lastName": last_name,
            "imageUrl": image_url,
        }

        def apply(_: Any) -> None:
            self.external_id = external_id
            self.is_synced = True
            self.remote.set_user_id(external_id)

        return await self.run(
            "sync_user", lambda: self.remote.post("/auth/callback", json=payload), apply
        )

    async def check_admin(self) -> bool:
        def apply(data: Any) -> None:
            self.is_admin = bool(data.get("admin")) if isinstance(data, dict) else False

        return await self.run("check_admin", lambda: self.remote.get("/admin/check"), apply)

    def sign_out(self) -> None:
        """Forget the session locally."""
        self.external_id = None
        self.is_synced = False
        self.is_admin = False
        self.remote.set_user_id(None)
        self._emit()

    def snapshot(self) -> AuthSnapshot:
        return AuthSnapshot(
            external_id=self.external_id,
            is_synced=self.is_synced,
            is_admin=self.is_admin,
            is_loading=self.is_loading,
            error=self.error,
        )

"""Idempotent user provisioning from external identity assertions.

Hey future me - this runs once per session bootstrap (the auth callback)! The contract:
after provision() returns, exactly one User exists for the external id, no matter how many
callbacks for the same identity raced each other.

How the race is handled:
1. Look up by external_id - found? Done, nothing to write.
2. Not found - insert. Two concurrent callbacks can BOTH get here.
3. The loser's INSERT hits the unique constraint. UserRepository turns that into
   DuplicateEntityException, session_scope rolls the loser back, and we report success -
   the user exists, which is all the caller wanted.

Anything else going wrong in storage is a ProvisionError (-> HTTP 500).
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from soundhaven.domain.entities import User
from soundhaven.domain.exceptions import (
    DuplicateEntityException,
    ProvisionError,
    ValidationException,
)
from soundhaven.infrastructure.persistence.repositories import UserRepository

logger = logging.getLogger(__name__)

SessionScope = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class IdentityProvisioner:
    """Ensures exactly one local user record per external identity."""

    # Yo, we take the session_scope FACTORY, not a session. Each provision() call needs its
    # own transaction so a duplicate-key rollback can't poison anybody else's work.
    def __init__(
        self,
        session_scope: SessionScope,
        repository_factory: Callable[[AsyncSession], UserRepository] = UserRepository,
    ) -> None:
        """Initialize provisioner.

        Args:
            session_scope: Factory returning a transactional session context manager
            repository_factory: Builds the user repository for a session
        """
        self._session_scope = session_scope
        self._repository_factory = repository_factory

    async def provision(
        self,
        external_id: str,
        first_name: str | None,
        last_name: str | None,
        avatar_url: str | None,
    ) -> bool:
        """Make sure a user exists for the external identity.

        Args:
            external_id: Identity provider's user id
            first_name: Given name, may be missing
            last_name: Family name, may be missing
            avatar_url: Profile image URL

        Returns:
            True if this call created the user, False if it already existed

        Raises:
            ValidationException: external_id is empty
            ProvisionError: Storage failed for any reason other than a duplicate key
        """
        if not external_id or not external_id.strip():
            raise ValidationException("external_id must not be empty")

        try:
            async with self._session_scope() as session:
                repo = self._repository_factory(session)

                existing = await repo.get_by_external_id(external_id)
                if existing is not None:
                    logger.debug("User %s already provisioned", external_id)
                    return False

                user = User(
                    external_id=external_id,
                    display_name=User.build_display_name(first_name, last_name),
                    avatar_url=avatar_url or "",
                )
                await repo.add(user)
        except DuplicateEntityException:
            logger.info(
                "User %s was provisioned by a concurrent request, treating as existing",
                external_id,
            )
            return False
        except SQLAlchemyError as e:
            logger.error(
                "Provisioning failed for %s: %s",
                external_id,
                e,
                exc_info=True,
            )
            raise ProvisionError(external_id, str(e)) from e

        logger.info("Provisioned new user %s", external_id)
        return True
